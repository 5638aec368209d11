"""Pydantic request/response schemas for the Payments API.

The wire format is camelCase (``paymentMethod``, ``cardHolderName``); the
Python names are used inside the service.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Method = Literal["cash", "credit_card", "bank_transfer", "momo", "zalopay"]
Status = Literal["pending", "processing", "completed", "failed", "cancelled", "refunded"]

# --- Requests ---


class PaymentDetailsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    card_number: str | None = Field(None, alias="cardNumber")
    card_holder_name: str | None = Field(None, alias="cardHolderName")
    bank_name: str | None = Field(None, alias="bankName")
    phone_number: str | None = Field(None, alias="phoneNumber")


class PaymentMetadataRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reference_code: str | None = Field(None, alias="referenceCode")


class InitiatePaymentRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "orderId": "DH12",
                    "amount": 80000,
                    "paymentMethod": "credit_card",
                    "paymentDetails": {"cardNumber": "4111111111111111", "cardHolderName": "NGUYEN VAN AN"},
                }
            ]
        },
    )

    order_id: str = Field(..., alias="orderId")
    amount: int = Field(..., ge=0)
    payment_method: Method = Field(..., alias="paymentMethod")
    payment_details: PaymentDetailsRequest = Field(default_factory=PaymentDetailsRequest, alias="paymentDetails")
    metadata: PaymentMetadataRequest = Field(default_factory=PaymentMetadataRequest)

    @model_validator(mode="after")
    def cards_need_number_and_holder(self) -> InitiatePaymentRequest:
        if self.payment_method == "credit_card" and not (
            self.payment_details.card_number and self.payment_details.card_holder_name
        ):
            raise ValueError("Card number and card holder name are required for credit card payments")
        return self


class PaymentStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: Status | None = None
    transaction_id: str | None = Field(None, alias="transactionId")
    failure_reason: str | None = Field(None, alias="failureReason")


class RefundRequest(BaseModel):
    amount: int | None = Field(None, ge=1)
    reason: str | None = None


# --- Responses ---


class PaymentDetailsResponse(BaseModel):
    cardHolderName: str | None = None
    bankName: str | None = None
    phoneNumber: str | None = None


class PaymentResponse(BaseModel):
    paymentId: str
    orderId: str
    userId: str
    amount: int
    currency: str
    paymentMethod: str
    status: str
    transactionId: str | None = None
    paymentDetails: PaymentDetailsResponse
    referenceCode: str | None = None
    failureReason: str | None = None
    processedAt: str | None = None
    refundedAt: str | None = None
    refundAmount: int = 0
    refundReason: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None


class PaymentSummary(BaseModel):
    paymentId: str
    orderId: str
    amount: int
    paymentMethod: str
    status: str
    transactionId: str | None = None
    createdAt: str | None = None


class PaymentCreatedResponse(BaseModel):
    message: str
    payment: PaymentSummary


class PaymentDetailResponse(BaseModel):
    payment: PaymentResponse


class PaymentMessageResponse(BaseModel):
    message: str
    payment: PaymentResponse


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class PaymentListResponse(BaseModel):
    payments: list[PaymentResponse]


class PaymentHistoryResponse(BaseModel):
    payments: list[PaymentResponse]
    pagination: PaginationResponse

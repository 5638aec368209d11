"""FastAPI routes for the Payments domain.

Behind the gateway, the caller's verified identity arrives in the
``X-User-Id``, ``X-User-Phone`` and ``X-User-Type`` headers. Customers see
only their own payments; status updates and refunds are admin-only.
"""

from fastapi import APIRouter, Depends, Header, Request
from protean.utils.globals import current_domain

from payments.api.schemas import (
    InitiatePaymentRequest,
    PaymentCreatedResponse,
    PaymentDetailResponse,
    PaymentHistoryResponse,
    PaymentListResponse,
    PaymentMessageResponse,
    PaymentStatusRequest,
    RefundRequest,
    Status,
)
from payments.payment.initiation import InitiatePayment
from payments.payment.payment import Payment
from payments.payment.refund import RefundPayment
from payments.payment.status import UpdatePaymentStatus
from shared.errors import AuthenticationError, AuthorizationError, NotFoundError
from shared.web import pagination

MAX_PAGE_SIZE = 50

payment_router = APIRouter(prefix="/payments", tags=["payments"])


def caller_id(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id:
        raise AuthenticationError("User authentication required")
    return x_user_id


def admin_caller(x_user_type: str | None = Header(default=None), x_user_id: str | None = Header(default=None)) -> str:
    if x_user_type != "admin":
        raise AuthorizationError("Admin access required", user_id=x_user_id)
    return x_user_id or ""


@payment_router.post("", status_code=201, response_model=PaymentCreatedResponse)
async def initiate_payment(
    body: InitiatePaymentRequest,
    request: Request,
    user_id: str = Depends(caller_id),
    x_user_phone: str | None = Header(default=None),
) -> PaymentCreatedResponse:
    details = body.payment_details
    command = InitiatePayment(
        order_number=body.order_id,
        user_id=user_id,
        user_phone=x_user_phone,
        amount=body.amount,
        method=body.payment_method,
        card_number=details.card_number,
        card_holder_name=details.card_holder_name,
        bank_name=details.bank_name,
        phone_number=details.phone_number,
        reference_code=body.metadata.reference_code,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    payment = current_domain.process(command, asynchronous=False)
    return PaymentCreatedResponse(message="Payment processed successfully", payment=payment.to_dict())


@payment_router.get("/order/{order_id}", response_model=PaymentListResponse)
async def order_payments(order_id: str, user_id: str = Depends(caller_id)) -> PaymentListResponse:
    payments = current_domain.repository_for(Payment).for_order(order_id, user_id)
    return PaymentListResponse(payments=[p.to_dict() for p in payments])


@payment_router.get("", response_model=PaymentHistoryResponse)
async def payment_history(
    page: int = 1,
    limit: int = 10,
    status: Status | None = None,
    user_id: str = Depends(caller_id),
) -> PaymentHistoryResponse:
    page, limit = max(page, 1), min(max(limit, 1), MAX_PAGE_SIZE)
    payments, total = current_domain.repository_for(Payment).for_user(user_id, status=status, page=page, limit=limit)
    return PaymentHistoryResponse(payments=[p.to_dict() for p in payments], pagination=pagination(page, limit, total))


@payment_router.get("/{payment_id}", response_model=PaymentDetailResponse)
async def get_payment(
    payment_id: str,
    user_id: str = Depends(caller_id),
    x_user_type: str | None = Header(default=None),
) -> PaymentDetailResponse:
    owner = None if x_user_type == "admin" else user_id
    payment = current_domain.repository_for(Payment).by_number(payment_id, user_id=owner)
    if payment is None:
        raise NotFoundError("Payment not found", payment_number=payment_id)
    return PaymentDetailResponse(payment=payment.to_dict())


@payment_router.put("/{payment_id}/status", response_model=PaymentMessageResponse)
async def update_payment_status(
    payment_id: str, body: PaymentStatusRequest, admin_id: str = Depends(admin_caller)
) -> PaymentMessageResponse:
    command = UpdatePaymentStatus(
        payment_number=payment_id,
        status=body.status,
        transaction_id=body.transaction_id,
        failure_reason=body.failure_reason,
    )
    payment = current_domain.process(command, asynchronous=False)
    return PaymentMessageResponse(message="Payment status updated successfully", payment=payment.to_dict())


@payment_router.post("/{payment_id}/refund", response_model=PaymentMessageResponse)
async def refund_payment(
    payment_id: str, body: RefundRequest | None = None, admin_id: str = Depends(admin_caller)
) -> PaymentMessageResponse:
    body = body or RefundRequest()
    command = RefundPayment(payment_number=payment_id, amount=body.amount, reason=body.reason, requested_by=admin_id)
    payment = current_domain.process(command, asynchronous=False)
    return PaymentMessageResponse(message="Refund processed successfully", payment=payment.to_dict())

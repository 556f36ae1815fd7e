"""
Customer router.

The only table a customer can see is the one bound to the AccessCode header;
no route takes a table id from the customer.
"""

from fastapi import APIRouter, Depends

from pos_api.core.dependencies import current_customer_session
from pos_api.services.domain import CustomerSession
from pos_shared.security.rate_limit import ACCESS_CODE_RATE_LIMIT, rate_limit
from pos_shared.utils.schemas import TableDetail


router = APIRouter(prefix="/customer", tags=["customer"])


@router.get(
    "/tables",
    response_model=TableDetail,
    dependencies=[Depends(rate_limit("customer", ACCESS_CODE_RATE_LIMIT))],
)
def get_my_table(
    session: CustomerSession = Depends(current_customer_session),
) -> TableDetail:
    return session.table

"""POST /v1/bank-verification - resolve account holder names"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Request

from trustrail_gateway.api.v1.schemas import BankVerificationRequest, BankVerificationResponse
from trustrail_gateway.api.dependencies import get_bank_client, get_request_id
from trustrail_gateway.infrastructure.clients.bank import BankClient
from trustrail_gateway.domain.exceptions import BankAPIError, ValidationError

router = APIRouter()


@router.post("/bank-verification", response_model=BankVerificationResponse)
async def verify_bank_account(
    request_body: BankVerificationRequest,
    request: Request,
    bank_client: BankClient = Depends(get_bank_client),
):
    """
    Look up the account name for a bank code and 10-digit account number.

    Unknown accounts return success=false; an unavailable bank returns 503.
    """
    request_id = get_request_id(request)

    try:
        result = await bank_client.verify_account(request_body.bank_code, request_body.account_number)

    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    except BankAPIError as e:
        logging.error(f"Bank API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Bank service unavailable")

    return BankVerificationResponse(success=result.success, account_name=result.account_name, error=result.error)

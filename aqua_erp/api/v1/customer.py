from fastapi import APIRouter, Depends, HTTPException, status, Query, Path
from sqlalchemy.orm import Session
from typing import Optional
from aqua_erp.common.exceptions import AppError
from aqua_erp.core.dependencies import get_db
from aqua_erp.services.customer_service import (
    create_customer,
    get_all_customers,
    update_customer,
)
from aqua_erp.schemas.customer import (
    CustomerCreate,
    CustomerListResponse,
    CustomerResponse,
    CustomerUpdate,
)
from aqua_erp.logger_config import logger

router = APIRouter()


@router.post("/add-customer", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
def add_customer(
    customer_data: CustomerCreate,
    db: Session = Depends(get_db),
):
    """
    Create a new customer.
    """
    try:
        return create_customer(
            db=db,
            full_name=customer_data.full_name,
            phone=customer_data.phone,
            address=customer_data.address,
            email=customer_data.email,
            id_card=customer_data.id_card,
        )
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error creating customer: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while creating the customer"
        )


@router.get("/get-customers", response_model=CustomerListResponse)
def get_customers(
    search: Optional[str] = Query(None, description="Search by name or phone"),
    db: Session = Depends(get_db),
):
    """
    List active customers.
    """
    customers = get_all_customers(db, search=search)
    return CustomerListResponse(total=len(customers), customers=customers)


@router.put("/update-customer/{customer_id}", response_model=CustomerResponse)
def edit_customer(
    customer_data: CustomerUpdate,
    customer_id: int = Path(..., gt=0),
    db: Session = Depends(get_db),
):
    """
    Update a customer. Only provided fields are changed.
    """
    try:
        return update_customer(db, customer_id, **customer_data.model_dump(exclude_unset=True))
    except AppError:
        raise
    except Exception as e:
        logger.error(f"Error updating customer: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An error occurred while updating the customer"
        )

from decimal import Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from aqua_erp.common.exceptions import AppError, NotFoundError, ValidationError
from aqua_erp.logger_config import logger
from aqua_erp.models.ledger import BankAccount, BankBalance
from aqua_erp.services.ledger_service import LedgerService, to_money
from aqua_erp.utils.transaction_id import generate_bank_transaction_id

# ==================== QUERY OPERATIONS ====================

def get_bank_account_by_id(db: Session, bank_id: int) -> Optional[BankAccount]:
    """Get bank account by ID."""
    return db.query(BankAccount).filter(BankAccount.id == bank_id).first()


def find_duplicate_account(
    db: Session,
    branch: str,
    account_number: str,
    exclude_id: Optional[int] = None
) -> Optional[BankAccount]:
    query = db.query(BankAccount).filter(
        BankAccount.is_active.is_(True),
        BankAccount.branch == branch,
        BankAccount.account_number == account_number,
    )
    if exclude_id:
        query = query.filter(BankAccount.id != exclude_id)
    return query.first()


def get_all_bank_accounts(db: Session) -> List[BankAccount]:
    """Active bank accounts with their active balances."""
    return (db.query(BankAccount)
            .options(joinedload(BankAccount.balances))
            .filter(BankAccount.is_active.is_(True))
            .order_by(BankAccount.branch.asc())
            .all())


def current_balance(account: BankAccount) -> Decimal:
    active = [b for b in account.balances if b.is_active]
    return to_money(active[0].balance) if active else Decimal("0.00")


# ==================== WRITE OPERATIONS ====================

def create_bank_account(
    db: Session,
    branch: str,
    account_number: str,
    owner: str,
    opening_balance: Decimal = Decimal("0.00"),
    user_id: Optional[int] = None,
) -> BankAccount:
    """
    Create a bank account with its balance row. A non-zero opening balance is
    posted as the first bank transaction so balance == sum of transactions.
    """
    if find_duplicate_account(db, branch, account_number):
        raise ValidationError("Bank account already exists")

    opening_balance = to_money(opening_balance)

    try:
        account = BankAccount(branch=branch, account_number=account_number, owner=owner.strip())
        db.add(account)
        db.flush()

        db.add(BankBalance(bank_id=account.id, balance=Decimal("0.00"), is_active=True))
        db.flush()

        if opening_balance > 0:
            LedgerService(db).apply_movement(
                opening_balance,
                transaction_id=generate_bank_transaction_id(),
                bank_id=account.id,
                user_id=user_id,
                description="Opening balance",
            )

        db.commit()
        db.refresh(account)
        logger.info(f"Bank account {branch}/{account_number} created with balance {opening_balance}")
        return account
    except AppError:
        db.rollback()
        raise
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error creating bank account: {str(e)}")
        raise ValidationError("Failed to create bank account")


def update_bank_account(
    db: Session,
    bank_id: int,
    branch: Optional[str] = None,
    account_number: Optional[str] = None,
    owner: Optional[str] = None,
) -> BankAccount:
    account = get_bank_account_by_id(db, bank_id)
    if not account:
        raise NotFoundError("Bank account not found")

    new_branch = branch if branch is not None else account.branch
    new_number = account_number if account_number is not None else account.account_number

    if find_duplicate_account(db, new_branch, new_number, exclude_id=bank_id):
        raise ValidationError("Bank account with this number and branch already exists")

    account.branch = new_branch
    account.account_number = new_number
    if owner is not None:
        account.owner = owner.strip()

    try:
        db.commit()
        db.refresh(account)
        return account
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Error updating bank account: {str(e)}")
        raise ValidationError("Failed to update bank account")


def delete_bank_account(db: Session, bank_id: int) -> None:
    """Soft delete: the account and its balance rows are deactivated, history is kept."""
    account = get_bank_account_by_id(db, bank_id)
    if not account:
        raise NotFoundError("Bank account not found")

    db.query(BankBalance).filter(BankBalance.bank_id == bank_id).update(
        {BankBalance.is_active: False}, synchronize_session=False
    )
    account.is_active = False
    db.commit()
    logger.info(f"Bank account {bank_id} deactivated")

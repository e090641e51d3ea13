import enum


class CreditStatus(str, enum.Enum):
    ACCEPTED = "ACCEPTED"
    OVERDUE = "OVERDUE"
    PAID = "PAID"


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    BANK = "BANK"
    CREDIT = "CREDIT"


class RepaymentMethod(str, enum.Enum):
    CASH = "CASH"
    BANK = "BANK"


class CustomerType(str, enum.Enum):
    REGULAR = "REGULAR"
    WALKER = "WALKER"

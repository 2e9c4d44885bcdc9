# partsdesk/db/enums.py
import enum


# Bill related enums
class BillStatus(str, enum.Enum):
    Paid = "Paid"
    Unpaid = "Unpaid"
    Pending = "Pending"


class PaymentMode(str, enum.Enum):
    Cash = "Cash"
    UPI = "UPI"
    Bank = "Bank"
    Card = "Card"


# Bill editor lifecycle
class EditState(str, enum.Enum):
    loading = "loading"
    ready = "ready"
    saving = "saving"
    saved = "saved"
    error = "error"

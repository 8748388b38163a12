'''

'''
import enum

# --- Base Enum Class ---
class ListableEnum(str, enum.Enum):
    """A custom Enum base class that can list all member names."""
    @classmethod
    def get_all_names(cls) -> list[str]:
        return [member.value for member in cls]

class PaymentStatus(ListableEnum):
    """Payment classification of a single lesson."""
    PAID = "PAID"
    OUTSTANDING = "OUTSTANDING"
    UNPAID = "UNPAID"
    # No amount due recorded; the legacy is_paid flag decides the label.
    NOT_SET = "NOT_SET"

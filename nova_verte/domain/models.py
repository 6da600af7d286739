"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

DEFAULT_MONTHLY_RATE = "5.00"


@dataclass
class Title:
    """Receivable (duplicata) to be anticipated, as edited by the user"""

    id: str
    face_value: str  # formatted "R$ 1.234,50" or raw minor-unit digits
    due_date: str  # "YYYY-MM-DD", empty when not filled in


@dataclass(frozen=True)
class FeeSchedule:
    """Fixed operation fees in BRL"""

    inclusion_fee: Decimal = Decimal("25.00")
    wire_fee: Decimal = Decimal("7.00")
    registration_fee: Decimal = Decimal("9.80")  # per title


@dataclass
class CalculationLine:
    """Per-title breakdown"""

    title: str
    days: int
    face_value: Decimal
    discount: Decimal
    net_value: Decimal


@dataclass
class CalculationResult:
    """Output of a simulation run"""

    gross_total: Decimal
    discount_total: Decimal
    fees_total: Decimal
    net_amount: Decimal
    lines: List[CalculationLine]


@dataclass
class OperationParameters:
    """What the report shows about the operation configuration"""

    monthly_rate: str
    title_count: int


@dataclass
class SessionSnapshot:
    """Full simulator state mirrored to storage after every change"""

    titles: List[Title] = field(default_factory=list)
    monthly_rate: str = DEFAULT_MONTHLY_RATE
    result: Optional[CalculationResult] = None
    result_visible: bool = False

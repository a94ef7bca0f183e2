import datetime
from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

CATEGORIES = ("diet", "travel", "energy")

# Upper bounds keep every estimate finite
MAX_SERVINGS = 100
MAX_DISTANCE_KM = 50000

# --- ACTION DETAILS (tagged by category) ---
class DietDetails(BaseModel):
    category: Literal["diet"] = "diet"
    mealType: str = Field(min_length=1)
    servings: Optional[float] = Field(default=None, gt=0, le=MAX_SERVINGS, allow_inf_nan=False)

    @property
    def quantity(self) -> float:
        return self.servings or 1

    def describe(self) -> str:
        return f"{_format_number(self.quantity)} serving(s) of {self.mealType}"

class TravelDetails(BaseModel):
    category: Literal["travel"] = "travel"
    mode: str = Field(min_length=1)
    distance: Optional[float] = Field(default=None, gt=0, le=MAX_DISTANCE_KM, allow_inf_nan=False)

    @property
    def quantity(self) -> float:
        return self.distance or 1

    def describe(self) -> str:
        return f"{_format_number(self.quantity)} km by {self.mode}"

class EnergyDetails(BaseModel):
    category: Literal["energy"] = "energy"
    action: str = Field(min_length=1)

    def describe(self) -> str:
        return self.action

ActionDetails = Annotated[
    Union[DietDetails, TravelDetails, EnergyDetails],
    Field(discriminator="category"),
]
_details_adapter = TypeAdapter(ActionDetails)

def parse_action_details(category: str, details: Optional[Mapping[str, Any]]) -> Union[DietDetails, TravelDetails, EnergyDetails]:
    """
    Validates a raw details payload into the variant matching `category`.
    Raises pydantic.ValidationError for an unknown category or a missing field.
    """
    payload = dict(details or {})
    payload["category"] = category
    return _details_adapter.validate_python(payload)

def _format_number(value: float) -> str:
    # 2.0 -> "2", 2.5 -> "2.5"
    return f"{value:g}"

# --- PERSISTED DOCUMENTS ---
class EcoAction(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    userId: str
    category: str
    description: str
    co2e: float = Field(ge=0)
    timestamp: datetime.datetime

    def to_firestore(self) -> dict:
        return self.model_dump(exclude={"id"})

class UserProgress(BaseModel):
    totalCO2e: float = Field(default=0.0, ge=0)
    points: int = Field(default=0, ge=0)
    badges: List[str] = []

class EcoUser(BaseModel):
    uid: str
    displayName: Optional[str] = None
    email: Optional[str] = None
    photoURL: Optional[str] = None
    createdAt: Optional[datetime.datetime] = None
    totalCO2e: float = 0.0
    points: int = 0
    badges: List[str] = []

    @property
    def progress(self) -> UserProgress:
        return UserProgress(totalCO2e=self.totalCO2e, points=self.points, badges=list(self.badges))

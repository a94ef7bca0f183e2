from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

# --- USERS ---
class RegisterUserRequest(BaseModel):
    uid: str = Field(min_length=1)
    displayName: Optional[str] = None
    email: Optional[str] = None
    photoURL: Optional[str] = None

class BadgeTier(BaseModel):
    threshold: int
    badge: str

class ProgressResponse(BaseModel):
    userId: str
    totalCO2e: float
    points: int
    badges: List[str]
    nextBadge: Optional[BadgeTier] = None

# --- ACTIONS ---
class LogActionRequest(BaseModel):
    category: Literal["diet", "travel", "energy"]
    # Validated against the category's details model in eco_actions
    details: Dict[str, Any] = {}

class LogActionResponse(BaseModel):
    success: bool
    action: Dict[str, Any]
    progress: Dict[str, Any]
    pointsGained: int
    newBadges: List[str] = []

# --- COACH ---
class CoachQueryRequest(BaseModel):
    query: str

class CoachQueryResponse(BaseModel):
    response: str

class RecommendationsResponse(BaseModel):
    recommendations: List[str]

from pydantic import BaseModel
from typing import Dict, Optional
from datetime import datetime


class GenderStats(BaseModel):
    male: int = 0
    female: int = 0
    other: int = 0


class BookStatsDocument(BaseModel):
    isbn: str
    totalReaders: int = 0
    totalLikes: int = 0
    averageRating: float = 0.0
    # keyed by rating value as a string ("0".."5", "10")
    ratingDistribution: Dict[str, int] = {}
    genderStats: Optional[GenderStats] = None
    ageStats: Optional[Dict[str, int]] = None
    updatedAt: Optional[datetime] = None

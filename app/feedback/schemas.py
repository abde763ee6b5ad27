"""Feedback Pydantic schemas"""
from datetime import date, datetime
from typing import Dict, Optional
from pydantic import BaseModel, Field, StrictInt


class CreateFeedbackRequest(BaseModel):
    """Request to rate how a complaint was handled"""
    complaint_id: StrictInt
    rating: StrictInt = Field(..., ge=1, le=5, description="Star rating 1-5")
    comments: Optional[str] = Field(None, description="Optional text feedback")


class FeedbackResponse(BaseModel):
    """Feedback response"""
    feedback_id: int
    complaint_id: int
    rating: int
    comments: Optional[str] = None
    satisfaction_level: str  # VERY_DISSATISFIED .. VERY_SATISFIED
    submitted_at: datetime


class FeedbackMetrics(BaseModel):
    """Satisfaction metrics"""
    average_rating: float
    satisfaction_index: float  # 0-100 scale
    total_feedbacks: int
    distribution: Dict[str, float]  # Percentage distribution of star ratings
    satisfaction_levels: Dict[str, int]  # Count by satisfaction level


class FeedbackSummaryResponse(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    metrics: FeedbackMetrics

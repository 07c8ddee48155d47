"""
Movie API Backend — Rating Request Schemas
============================================

What:  Body accepted by POST /api/v1/ratings.
Why:   `movie` and `value` are optional at the schema level so that a missing
       one yields the API's own message ("Please provide movie and rating
       value") rather than a generic body-validation error. Range and
       existence checks happen in RatingService.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator

REVIEW_MAX_LENGTH = 500


class RatingCreate(BaseModel):
    movie: Optional[str] = Field(default=None, description="Rated movie id")
    value: Optional[float] = Field(default=None, description="Score from 1 to 10")
    review: Optional[str] = Field(default=None, description="Free text, up to 500 characters")

    @field_validator("review")
    @classmethod
    def validate_review(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if len(v) > REVIEW_MAX_LENGTH:
            raise ValueError("Review must be less or equal than 500 characters")
        return v

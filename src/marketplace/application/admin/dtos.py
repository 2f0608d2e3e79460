"""Data Transfer Objects for the admin application layer."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AdminLoginDTO(BaseModel):
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class AdminSummaryDTO(BaseModel):
    id: str
    email: str
    role: str


class AdminLoginResponseDTO(BaseModel):
    token: str
    token_type: str = "JWT"
    user: AdminSummaryDTO

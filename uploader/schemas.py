"""Pydantic schemas for the upload API request and response bodies."""

from pydantic import BaseModel, ConfigDict, Field


class InitiateRequest(BaseModel):
    """Request model for opening an upload session."""
    fileName: str
    fileSize: int
    fileHash: str
    expiry: str


class InitiateResponse(BaseModel):
    """Response model for an opened upload session."""
    model_config = ConfigDict(extra='ignore')

    uploadId: str
    chunkSize: int = Field(gt=0, strict=True)


class FinalizeRequest(BaseModel):
    """Request model for finalizing an upload."""
    uploadId: str
    totalChunks: int


class FinalizeResponse(BaseModel):
    """Response model for a finalized upload."""
    model_config = ConfigDict(extra='ignore')

    fileName: str
    link: str
    deleteDate: str

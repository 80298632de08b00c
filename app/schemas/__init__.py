"""Schema exports."""

from app.schemas.patent import (
	CitationsRead,
	FamilyMemberRead,
	FetchContentRequest,
	FetchPatentRequest,
	PatentContent,
	PatentRecord,
	PatentReference,
	SearchPatentsParams,
)

__all__ = [
	"CitationsRead",
	"FamilyMemberRead",
	"FetchContentRequest",
	"FetchPatentRequest",
	"PatentContent",
	"PatentRecord",
	"PatentReference",
	"SearchPatentsParams",
]

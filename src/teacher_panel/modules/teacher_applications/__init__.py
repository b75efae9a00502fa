"""
Teacher Applications Module

Administrator review of teacher applications:
1. Approval - provisions the teacher identity and activates teachers/{uid}
2. Rejection - marks the application rejected
3. Deletion - removes the application record (profiles and identities stay)

API Endpoints (admin only):
- POST /admin/teacher-applications/approve
- POST /admin/teacher-applications/reject
- POST /admin/teacher-applications/delete
- GET /admin/teacher-applications/{application_id}
- GET /admin/teachers/{uid}
"""

from .admin_router import router

__all__ = ["router"]

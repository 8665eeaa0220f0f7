"""SQLAlchemy models."""
from app.models.platform_admin import PlatformAdmin
from app.models.billing import Plan, Subscription, Invoice
from app.models.tenant import Tenant
from app.models.organization import Organization, Building, Floor, Domain
from app.models.role import Role
from app.models.user import User
from app.models.admin import Admin
from app.models.admin_assignment import AdminAssignment
from app.models.admin_permission import AdminPermission
from app.models.admin_onboarding_request import AdminOnboardingRequest
from app.models.activity import UsageEvent, Notification, Webhook, AuditLog

__all__ = [
    "PlatformAdmin",
    "Plan",
    "Subscription",
    "Invoice",
    "Tenant",
    "Organization",
    "Building",
    "Floor",
    "Domain",
    "Role",
    "User",
    "Admin",
    "AdminAssignment",
    "AdminPermission",
    "AdminOnboardingRequest",
    "UsageEvent",
    "Notification",
    "Webhook",
    "AuditLog",
]

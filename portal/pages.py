"""
Page registry.

Every HTML route of the portal with its static document metadata and the
single top-level component it renders. Metadata never depends on the
request, so it is fixed here rather than computed by the handlers.
"""

from dataclasses import dataclass, asdict
from typing import Dict, List, Optional


DEFAULT_TITLE = "Healthcare Staffing Platform - Pharmacy Shifts"
DEFAULT_DESCRIPTION = (
    "Professional healthcare staffing and shift management platform. "
    "Find and manage pharmacy shifts with ease."
)


@dataclass(frozen=True)
class PageRoute:
    path: str
    component: str
    title: str = DEFAULT_TITLE
    description: str = DEFAULT_DESCRIPTION
    # Wraps the component in the profile navigation
    layout: Optional[str] = None

    def as_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)


PAGES: List[PageRoute] = [
    PageRoute(
        path="/languages",
        component="LanguagesPage",
        title="Languages - Healthcare Professional Registration",
        description="Select languages you speak",
    ),
    PageRoute(
        path="/my-shifts",
        component="MyShiftsPage",
        title="My Shifts - Healthcare Professional Portal",
        description="View and manage your pharmacy shifts",
    ),
    PageRoute(
        path="/profile/bank-account",
        component="BankAccountForm",
        title="Bank Account - Profile",
        description="Manage your bank account information",
        layout="profile",
    ),
    PageRoute(
        path="/profile",
        component="ProfileView",
        title="Profile - Healthcare Professional Portal",
        description="View and manage your healthcare professional profile",
        layout="profile",
    ),
    PageRoute(
        path="/profile/settings",
        component="SettingsForm",
        title="Account Settings - Healthcare Professional Portal",
        description="Manage your account settings and preferences",
        layout="profile",
    ),
    PageRoute(
        path="/software",
        component="SoftwarePage",
        title="Software - Healthcare Professional Registration",
        description="Select software you are experienced with",
    ),
    PageRoute(path="/", component="HealthcareRegistration"),
    PageRoute(
        path="/register",
        component="HealthcareRegistration",
        title="Healthcare Professional Registration",
        description="Join our network of verified healthcare professionals",
    ),
    PageRoute(path="/login", component="LoginPage"),
    PageRoute(path="/account-review", component="AccountReview"),
    PageRoute(
        path="/profile/edit",
        component="EditProfileForm",
        title="Edit Profile - Healthcare Professional Portal",
        description="Edit your healthcare professional profile information",
        layout="profile",
    ),
    PageRoute(
        path="/profile/password",
        component="ChangePasswordForm",
        title="Change Password - Healthcare Professional Portal",
        description="Change your account password",
        layout="profile",
    ),
    PageRoute(
        path="/shifts",
        component="ShiftBookingPage",
        title="Alfa Relief - Healthcare Professional Portal",
        description="Browse and apply for Alfa Relief shifts in your area",
    ),
    PageRoute(
        path="/shifts/{shift_id}",
        component="ShiftDetailsPage",
        title="Shift Details - Healthcare Professional Portal",
        description="View detailed information about pharmacy shift",
    ),
    PageRoute(path="/registration/languages", component="LanguagesPage"),
    PageRoute(path="/registration/skills", component="SkillsPage"),
    PageRoute(path="/registration/software", component="SoftwarePage"),
]

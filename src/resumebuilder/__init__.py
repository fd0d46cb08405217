"""ResumeBuilder - authentication service.

Account registration, email verification, password login and
JWT-based request authentication for the ResumeBuilder platform.
"""

__version__ = "0.1.0"

"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Application initialization and default admin creation
- db: Database configuration and connection management
- errors: API error taxonomy rendered as the JSON error envelope
- permissions: Ownership and role rules
- rate_limit: Fixed-window request counter
- security: Access tokens and credential comparison
"""

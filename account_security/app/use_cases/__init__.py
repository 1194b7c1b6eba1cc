"""
Use Cases

Organized by area:
- auth/: registration, login, second-factor login, password change
- two_factor/: TOTP lifecycle and recovery codes
- sessions/: bearer authentication and device sessions
- oauth/: provider sign-in and account linking
- password_reset/: reset request, validation, confirmation
- email_verification/: send, verify, status
- admin/: administrative unlock

Import from subdirectories.
"""

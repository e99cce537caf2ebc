"""
Use Cases

Organized into domain folders:
- auth/: Registration, login and password reset flows
"""

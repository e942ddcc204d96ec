"""
auth — Credential lifecycle and access gating.

Provides:
  • Password hashing (bcrypt, salted per call)
  • Signed, time-bounded token issuance & verification
  • Register / Login API routes
  • ``get_current_account_id`` FastAPI dependency (the access gate)
"""

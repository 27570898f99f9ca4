"""
journey_backend.auth

Authentication package.

Responsibilities:
- JWT helpers and validation.
- The auth gate middleware that attaches an optional `Identity` per request.
- FastAPI dependencies for endpoints that need an identity.
"""

# Package marker.


# --- Module Notes -----------------------------------------------------------
# Token issuance for real users lives outside this service; `jwt.issue_token`
# only backs the dev token endpoint and tests.

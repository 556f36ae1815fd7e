"""
HTTP routers.

- public: /, /health
- auth: /auth/*
- manage: /manage/* (staff token + role)
- customer: /customer/* (table access code)
"""

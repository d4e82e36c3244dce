# 📄 File: authhub/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Organizes everything about accounts: signing up, signing in and out, confirming an email
# address and resetting a forgotten password
# 🧪 Purpose (Technical Summary):
# User management bounded context laid out as domain / application / infrastructure /
# presentation layers; use cases are typed-output operations chained through domain events
# 🔗 Dependencies:
# FastAPI, SQLAlchemy, pydantic, passlib, python-jose, authhub.shared.core
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.dependencies, authhub.api.v1.router

"""
User Management Module

Architecture follows Domain-Driven Design:
- Domain: models, events, repository and service interfaces
- Application: commands, queries and operations
- Infrastructure: SQLAlchemy repositories
- Presentation: API endpoints and response schemas

Event choreography:
- UserCreated -> CreateTokenOnUserCreation -> TokenCreated -> SendEmailOnUserCreation
- ForgotPassword -> SendEmailOnForgotPassword
- UserDeleted -> DeleteTokensOnUserDeletion
"""

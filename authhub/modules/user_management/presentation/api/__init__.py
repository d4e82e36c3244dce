# 📄 File: authhub/modules/user_management/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints and the shapes of their answers.
# 🧪 Purpose (Technical Summary):
# API package for user management.
# 🔗 Dependencies:
# FastAPI, pydantic
# 🔄 Connected Modules / Calls From:
# authhub.api.v1.router

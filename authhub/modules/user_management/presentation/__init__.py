# 📄 File: authhub/modules/user_management/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web-facing side of account management.
# 🧪 Purpose (Technical Summary):
# Presentation layer package (FastAPI routers and response schemas).
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# authhub.api.v1.router

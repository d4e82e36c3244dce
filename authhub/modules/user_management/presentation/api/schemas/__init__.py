# 📄 File: authhub/modules/user_management/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# The shapes of the answers the account endpoints send back.
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas documented in OpenAPI.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# user_management routers

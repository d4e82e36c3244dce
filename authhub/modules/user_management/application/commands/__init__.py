# 📄 File: authhub/modules/user_management/application/commands/__init__.py
# 🧭 Purpose (Layman Explanation):
# The request forms for changing something: sign up, update, delete, log in, reset password.
# 🧪 Purpose (Technical Summary):
# Pydantic command models.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# user_management operations

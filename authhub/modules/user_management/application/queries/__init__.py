# 📄 File: authhub/modules/user_management/application/queries/__init__.py
# 🧭 Purpose (Layman Explanation):
# The request forms for reading accounts.
# 🧪 Purpose (Technical Summary):
# Pydantic query models.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# GetUser, GetAllUsers

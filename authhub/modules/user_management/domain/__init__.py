# 📄 File: authhub/modules/user_management/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The account rules themselves, independent of databases or web pages.
# 🧪 Purpose (Technical Summary):
# Domain layer package: models, events, repository and service interfaces.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# user_management application and infrastructure layers

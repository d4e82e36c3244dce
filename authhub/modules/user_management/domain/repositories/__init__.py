# 📄 File: authhub/modules/user_management/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# Describes how accounts and tokens are saved and found, without saying where.
# 🧪 Purpose (Technical Summary):
# Repository interfaces (abstract base classes).
# 🔗 Dependencies:
# abc
# 🔄 Connected Modules / Calls From:
# Operations, SQLAlchemy implementations

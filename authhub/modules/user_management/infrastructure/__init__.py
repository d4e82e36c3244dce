# 📄 File: authhub/modules/user_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Where accounts and tokens are actually stored.
# 🧪 Purpose (Technical Summary):
# Infrastructure layer package.
# 🔗 Dependencies:
# SQLAlchemy
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.dependencies

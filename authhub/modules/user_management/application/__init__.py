# 📄 File: authhub/modules/user_management/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# The actions people and the system can take on accounts.
# 🧪 Purpose (Technical Summary):
# Application layer: command/query models and the operations that consume them.
# 🔗 Dependencies:
# pydantic, authhub.shared.core
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.dependencies, presentation routers

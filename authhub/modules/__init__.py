# 📄 File: authhub/modules/__init__.py
# 🧭 Purpose (Layman Explanation):
# Holds the feature areas of the service; today that is user management.
# 🧪 Purpose (Technical Summary):
# Bounded-context modules package.
# 🔗 Dependencies:
# Python packaging system
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.dependencies, authhub.api.v1.router

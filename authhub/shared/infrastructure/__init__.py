# 📄 File: authhub/shared/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# The plumbing that talks to the outside world: the database, redis and the mail server.
# 🧪 Purpose (Technical Summary):
# Infrastructure adapters package (SQLAlchemy async database, redis token blacklist, SMTP email).
# 🔗 Dependencies:
# Python packaging system
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.dependencies

# 📄 File: authhub/modules/user_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# Describes the helpers the account rules rely on: password hashing, login tokens and email.
# 🧪 Purpose (Technical Summary):
# Collaborator interfaces for security and email adapters.
# 🔗 Dependencies:
# abc
# 🔄 Connected Modules / Calls From:
# Operations, authhub.shared.core.security, authhub.shared.infrastructure

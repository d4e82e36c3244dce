# 📄 File: authhub/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a Python package containing the common tools every part of the
# account service uses, like settings, logging, database access and the event system.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package: configuration, operation framework, domain event bus, infrastructure
# adapters and logging utilities.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - authhub.modules.user_management, authhub.main, authhub.api

# 📄 File: authhub/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the main folder of the account service so Python can find all of its parts.
#
# 🧪 Purpose (Technical Summary):
# Root package of the AuthHub authentication and user management backend.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - authhub.main (application factory), console script entry point

"""
AuthHub - Authentication and User Management Service

Every use case is an Operation with a closed set of named outputs; side
effects such as verification tokens and emails are chained through an
in-process domain event bus wired once at startup.
"""

__version__ = "1.0.0"

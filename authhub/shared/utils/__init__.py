# 📄 File: authhub/shared/utils/__init__.py
# 🧭 Purpose (Layman Explanation):
# Small helpers used everywhere, starting with the log writer.
# 🧪 Purpose (Technical Summary):
# Utility package; structured logging lives in authhub.shared.utils.logging.
# 🔗 Dependencies:
# Python packaging system
# 🔄 Connected Modules / Calls From:
# All modules that log

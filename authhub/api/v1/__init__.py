# 📄 File: authhub/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the web API.
# 🧪 Purpose (Technical Summary):
# API v1 package; the aggregated router lives in authhub.api.v1.router.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# authhub.main

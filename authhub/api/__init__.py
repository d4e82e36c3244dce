# 📄 File: authhub/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The front door of the service: everything that turns web requests into actions and answers.
# 🧪 Purpose (Technical Summary):
# HTTP layer package: versioned routers and the channel-to-status responder.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# authhub.main

# 📄 File: authhub/shared/infrastructure/cache/__init__.py
# 🧭 Purpose (Layman Explanation):
# The fast memory store used to remember signed-out login tokens.
# 🧪 Purpose (Technical Summary):
# Redis-backed cache adapters.
# 🔗 Dependencies:
# redis.asyncio
# 🔄 Connected Modules / Calls From:
# authhub.shared.core.dependencies

# 📄 File: authhub/shared/config/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups the settings of the account service in one place.
# 🧪 Purpose (Technical Summary):
# Configuration package exports (pydantic-settings Settings and the cached accessor).
# 🔗 Dependencies:
# authhub.shared.config.settings
# 🔄 Connected Modules / Calls From:
# authhub.main, authhub.shared.core.dependencies, authhub.shared.utils.logging

from authhub.shared.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]

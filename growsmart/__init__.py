# 📄 File: growsmart/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this folder holds the Grow Smart AI farming assistant and records its version.
#
# 🧪 Purpose (Technical Summary):
# Package initialization with version and title metadata for the Grow Smart FastAPI service
# and its Python client.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - growsmart.main (application entry point)
# - pyproject.toml (console script)

"""
Grow Smart AI - AI-Powered Farming Advice and Plant Identification

Backend API for an agricultural advisor chat, photo-based plant
identification with care guidance, and farm analytics.
"""

__version__ = "1.0.0"
__title__ = "Grow Smart AI API"
__description__ = "AI-Powered Farming Advice and Plant Identification"

# 📄 File: growsmart/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 of the Grow Smart API, kept separate so later versions don't break existing apps.
# 🧪 Purpose (Technical Summary):
# API v1 package: router aggregation and health endpoints.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# growsmart.main

__api_version__ = "v1"

# 📄 File: growsmart/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# The front door of Grow Smart AI where all web requests come in.
# 🧪 Purpose (Technical Summary):
# HTTP layer package: middleware and versioned routers.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# growsmart.main

"""HTTP surface: FastAPI routers, Problem Details rendering, middleware.

Routes translate requests into commands or queries, call the handler the
container built, and turn its Result into a response. Business rules live
in the domain; access checks live in the repositories.
"""

"""
Application services. Business logic lives in `domain`.
"""

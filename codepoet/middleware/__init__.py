from codepoet.middleware.performance import PerformanceMiddleware

__all__ = ["PerformanceMiddleware"]

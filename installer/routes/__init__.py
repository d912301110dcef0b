"""路由蓝图集合."""

from .install import install_bp

__all__ = ["install_bp"]

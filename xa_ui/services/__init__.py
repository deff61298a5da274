from xa_ui.services.finder import FinderRevealer

__all__ = ["FinderRevealer"]

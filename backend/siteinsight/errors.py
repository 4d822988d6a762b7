"""Failures that abort the analysis of a page (as opposed to soft warnings)."""


class AnalysisError(Exception):
    """Base class for fatal analysis failures."""


class BrowserLaunchError(AnalysisError):
    pass


class NavigationError(AnalysisError):
    pass

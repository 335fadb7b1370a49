class KeyHuntException(Exception):
    """Base exception for keyhunt"""
    pass

class ConfigurationError(KeyHuntException):
    """Invalid settings or command line input"""
    pass

class CatalogError(KeyHuntException):
    """Translation catalog could not be loaded"""
    pass

class CatalogNotFoundError(CatalogError):
    """Catalog path does not exist"""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Path does not exist: {self.path}")

class EmptyCatalogError(CatalogError):
    """Catalog directory holds no JSON files"""

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"No JSON files found in directory: {self.path}")

class CatalogParseError(CatalogError):
    """Catalog file is not valid JSON or cannot be read"""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = str(reason)
        super().__init__(f"Failed to read {self.path}: {self.reason}")

class CatalogWriteError(KeyHuntException):
    """Cleaned catalog could not be written back"""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = str(reason)
        super().__init__(f"Failed to write {self.path}: {self.reason}")

class ReportWriteError(KeyHuntException):
    """JSON report could not be written"""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = str(reason)
        super().__init__(f"Failed to write report {self.path}: {self.reason}")

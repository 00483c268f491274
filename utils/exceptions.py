class LondonCrimeError(Exception):
    """Base Exception Class"""
    pass


class DatasetLoadError(LondonCrimeError):
    """Error for when the crime dataset or the borough geometry cannot be loaded"""
    pass


class BoroughNotFoundError(LondonCrimeError, KeyError):
    """Error for a borough key or region id with no counterpart in the lookup"""

    def __init__(self, identifier):
        self.identifier = identifier
        super().__init__(identifier)

    def __str__(self):
        return f"Borough {self.identifier!r} not found"


class FrameNotFoundError(LondonCrimeError, KeyError):
    """Error for a date key that is not present in the dataset"""

    def __init__(self, date_key):
        self.date_key = date_key
        super().__init__(date_key)

    def __str__(self):
        return f"Crime data for {self.date_key!r} not found"

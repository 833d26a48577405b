"""
Errors raised by the bootstrap tool itself.

Driver errors (pymongo.errors.*) are never wrapped; they propagate as-is.
"""


class VnfSchemaError(Exception):
    """Base class for vnf-schema errors."""


class SchemaVerificationError(VnfSchemaError):
    """
    Raised when an initialized database does not match the declared layout.
    """
    def __init__(self, database, problems):
        self.database = database
        self.problems = list(problems)
        self.message = (
            f"Database {database} failed verification with "
            f"{len(self.problems)} problem(s): " + "; ".join(self.problems)
        )
        super().__init__(self.message)

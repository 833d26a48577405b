"""
Report models returned by the initializer and verifier.
"""
from vnf_schema.models.report import InitReport, UserAction, VerificationReport

__all__ = ["InitReport", "UserAction", "VerificationReport"]

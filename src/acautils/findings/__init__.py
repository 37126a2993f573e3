"""Match and change record models."""

from acautils.findings.models import ChangeRecord, MatchRecord, ScanResult, Skip, ToggleResult

__all__ = ["ChangeRecord", "MatchRecord", "ScanResult", "Skip", "ToggleResult"]

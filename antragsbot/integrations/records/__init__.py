# Record Service integration module
from antragsbot.integrations.records.client import RecordServiceClient

__all__ = ["RecordServiceClient"]

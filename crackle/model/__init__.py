from .frequency import FrequencyModel, LetterStat, ScoredWord

__all__ = ["FrequencyModel", "LetterStat", "ScoredWord"]

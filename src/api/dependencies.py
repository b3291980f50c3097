from analysis.analyzer import TaskAnalyzer
from classification.task_classifier import HeuristicClassifier
from taskmaster.config import HeuristicSettings, ProviderConfig

# Configuration, read once at import (process start) and never mutated
provider_config = ProviderConfig.from_env()
heuristic_settings = HeuristicSettings.from_env()

analyzer = TaskAnalyzer(
    provider_config,
    classifier=HeuristicClassifier.from_settings(heuristic_settings),
)


def get_provider_config() -> ProviderConfig:
    return provider_config


def get_analyzer() -> TaskAnalyzer:
    return analyzer

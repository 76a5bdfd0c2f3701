# main.py
from covidash.adapters.retry_tenacity import TenacityRetryAdapter
from covidash.core.config import RetryConfig
from covidash.core.interfaces.retry import RetryPort
from covidash.core.logging_config import configure_logging
from covidash.core.settings import DashSettings, app_settings, logger


# main lives at the outermost layer (not in core)
# Configures logging, reports settings and builds the retry adapter
# that callers use to wrap their fetch coroutines

def bootstrap(settings: DashSettings | None = None) -> RetryPort:
    settings = settings or app_settings

    configure_logging(settings.COVIDASH_LOG_LEVEL)
    settings.print_settings(logger)

    retry_config = RetryConfig.from_app_settings(settings)
    logger.info(
        f"[bootstrap] retry policy attempts={retry_config.max_attempts} "
        f"interval_ms={retry_config.interval_ms}"
    )
    return TenacityRetryAdapter(
        attempts=retry_config.max_attempts,
        interval=retry_config.interval_seconds,
    )

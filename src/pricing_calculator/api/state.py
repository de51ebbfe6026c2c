"""
Shared API state: one repository loaded once for the whole process.
"""
from ..config.settings import get_settings
from ..data.repository import PricingRepository
from ..logging_config import configure_logging


settings = get_settings()
configure_logging(settings.log_level)
repository = PricingRepository(settings.data_dir)

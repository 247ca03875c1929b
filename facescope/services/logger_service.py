import logging
from supabase import create_client
from facescope.config.settings import *

logger = logging.getLogger(__name__)


def create_supabase_client(url=SUPABASE_URL, key=SUPABASE_KEY):
    if not url or not key:
        return None
    return create_client(url, key)


class FaceDetectionLogger:
    """Records changes of the displayed face info to a Supabase table"""

    def __init__(self, client=None, table=SUPABASE_LOG_TABLE,
                 min_update_interval=MIN_LOG_UPDATE_INTERVAL):
        self.supabase = client if client is not None else create_supabase_client()
        self.table = table
        self.min_update_interval = min_update_interval
        self.last_info = None
        self.last_update_time = 0

    @property
    def enabled(self):
        return self.supabase is not None

    def should_update(self, current_time, info):
        if not self.enabled or info is None:
            return False
        if current_time - self.last_update_time < self.min_update_interval:
            return False
        return info != self.last_info

    def update_log(self, info, current_time):
        try:
            log_data = {
                "age": float(info.age),
                "gender": info.gender,
                "expression": info.expression
            }

            self.supabase.table(self.table).insert(log_data).execute()

            self.last_info = info
            self.last_update_time = current_time

            return True

        except Exception as e:
            logger.error("Error updating face log: %s", e)
            return False

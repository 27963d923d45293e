"""singleton pattern base class implementation"""

from threading import RLock


class SingletonInstance:
    """base class for lazily created, process-wide instances"""

    __instance = None
    __lock = RLock()

    @classmethod
    def instance(cls, *args, **kwargs):
        """create or get the singleton instance

        Arguments are only used on the first call.
        """
        with cls.__lock:
            if cls.__instance is None:
                cls.__instance = cls(*args, **kwargs)
            return cls.__instance

    @classmethod
    def has_instance(cls) -> bool:
        """check if the instance was already created"""
        return cls.__instance is not None

    @classmethod
    def reset_instance(cls):
        """drop the singleton instance (for testing)"""
        with cls.__lock:
            cls.__instance = None

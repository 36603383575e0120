"""
转换结果槽
每个调用方（例如一个 Streamlit 会话）持有一个 ResultSlot：
新的请求会让旧请求作废，作废请求的结果被丢弃；失败的请求不会覆盖上一次成功的结果。
"""

import itertools
import logging
import threading
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ResultSlot(Generic[T]):

    def __init__(self):
        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self._latest = 0
        self._result: Optional[T] = None
        self._error: Optional[BaseException] = None

    def begin(self) -> int:
        """开始新请求，返回其令牌；之前的令牌全部作废"""
        with self._lock:
            self._latest = next(self._tokens)
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    def publish(self, token: int, result: T) -> bool:
        """
        提交结果

        Returns:
            True 表示结果被采用；False 表示请求已被新请求取代，结果被丢弃
        """
        with self._lock:
            if token != self._latest:
                logger.debug("Discarding result of superseded request %d (latest %d)", token, self._latest)
                return False
            self._result = result
            self._error = None
            return True

    def fail(self, token: int, error: BaseException) -> bool:
        """记录失败；保留上一次成功的结果"""
        with self._lock:
            if token != self._latest:
                return False
            self._error = error
            return True

    @property
    def result(self) -> Optional[T]:
        with self._lock:
            return self._result

    @property
    def error(self) -> Optional[BaseException]:
        with self._lock:
            return self._error

    def clear(self):
        with self._lock:
            self._latest = next(self._tokens)
            self._result = None
            self._error = None

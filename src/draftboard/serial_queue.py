import logging
from collections import deque

logger = logging.getLogger(__name__)


class SerialQueue:
    """
    不可重入的工作佇列。
    調整尺寸與追加取樣點都經過這裡：工作執行中再送進來的工作會排隊，
    等目前的工作完整結束後才依序執行，兩者永遠不會交錯。
    """

    def __init__(self):
        self._pending = deque()
        self._running = False

    @property
    def busy(self) -> bool:
        return self._running

    def submit(self, func, *args, **kwargs):
        self._pending.append((func, args, kwargs))
        if self._running:
            return
        self._running = True
        try:
            while self._pending:
                func, args, kwargs = self._pending.popleft()
                func(*args, **kwargs)
        finally:
            self._running = False
            if self._pending:
                # 只有工作丟出例外時才會走到這裡
                logger.warning("Dropping %d queued task(s) after failure", len(self._pending))
                self._pending.clear()

"""
Reader/writer lock for the in-memory stores.

Any number of readers may hold the lock together; a writer holds it alone.
Waiting writers block new readers so a steady stream of lookups cannot
starve saves.
"""

import threading
from contextlib import contextmanager


class ReadWriteLock:
    """Shared/exclusive lock built on a single condition variable"""
    
    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0
    
    def acquire_read(self):
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1
    
    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()
    
    def acquire_write(self):
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True
    
    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()
    
    @contextmanager
    def read_locked(self):
        """Hold the lock in shared mode for the duration of the block"""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()
    
    @contextmanager
    def write_locked(self):
        """Hold the lock in exclusive mode for the duration of the block"""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

# core/change_notifier.py

from typing import Callable, List

Subscriber = Callable[[str], None]


class ChangeNotifier:
    """
    Broadcasts "the stored profile for this identifier changed".
    Subscribers only receive the identifier and re-read the profile if they need it.
    """

    def __init__(self):
        self._subscribers: List[Subscriber] = []

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Registers a callback and returns a function that unregisters it."""
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def publish(self, identifier: str) -> None:
        # Iterate over a snapshot so callbacks may unsubscribe themselves.
        for callback in list(self._subscribers):
            try:
                callback(identifier)
            except Exception as e:
                print(f"---CHANGE NOTIFIER: Subscriber failed for {identifier}: {type(e).__name__} - {e}---")

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

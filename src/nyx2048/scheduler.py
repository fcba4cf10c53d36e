"""
spawn delay for front-ends that animate the slide before the new tile shows
"""
from nyx2048.config import SPAWN_DELAY_MS
from nyx2048.moves import parse_direction


class DelayedSpawner:
    """
    runs moves on a Game2048 with the spawn held back for delay_ms

    while a spawn is pending, new directions are queued and coalesced: only
    the latest one is kept and it is played right after the spawn. times are
    plain milliseconds from whatever clock the caller uses
    """

    def __init__(self, game, delay_ms=SPAWN_DELAY_MS):
        self.game = game
        self.delay_ms = delay_ms
        self.due = None
        self.queued = None

    @property
    def pending(self):
        return self.due is not None

    def submit(self, direction, now):
        """resolve direction now, or queue it behind the pending spawn"""
        if self.pending:
            if parse_direction(direction) is None:
                return False
            self.queued = direction
            return True

        moved, _ = self.game.begin_move(direction)
        if not moved:
            return False
        if self.delay_ms <= 0:
            self.game.finish_move()
        else:
            self.due = now + self.delay_ms
        return True

    def tick(self, now):
        """spawn once the delay has passed, then play the queued direction"""
        if self.due is None or now < self.due:
            return False

        self.due = None
        self.game.finish_move()

        queued, self.queued = self.queued, None
        if queued is not None:
            self.submit(queued, now)
        return True

    def flush(self):
        """complete a pending spawn now and drop the queued direction"""
        self.queued = None
        if self.pending:
            self.due = None
            self.game.finish_move()

    def cancel(self):
        self.due = None
        self.queued = None

    def undo(self):
        self.cancel()
        return self.game.undo()

    def restart(self):
        self.cancel()
        self.game.reset()

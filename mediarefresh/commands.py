"""Fire-and-wait for asynchronous service commands (Sonarr's /command queue)."""

import time

from .console import get_default
from .models import CommandStatus

POLL_INTERVAL = 1.0  # seconds between status checks
COMMAND_TIMEOUT = 600.0  # 10 minutes


class CommandRunner:
    """
    Submits a command and blocks until it completes, fails or times out.

    submit(name, payload) returns a Reply whose data is a Command (or None).
    status(command_id) returns a Reply whose data is a CommandStatus.
    clock and sleep are swappable so tests don't have to wait.
    """

    def __init__(self, submit, status, clock=time.monotonic, sleep=time.sleep, log=None,
                 poll_interval=POLL_INTERVAL, timeout=COMMAND_TIMEOUT):
        self.submit = submit
        self.status = status
        self.clock = clock
        self.sleep = sleep
        self.log = log or get_default()
        self.poll_interval = poll_interval
        self.timeout = timeout

    @classmethod
    def for_client(cls, client, **kwargs):
        """Runner bound to a client exposing send_command and command_status."""
        return cls(client.send_command, client.command_status, log=client.log, **kwargs)

    def submit_and_await(self, name, payload=None, poll_interval=None, timeout=None):
        """True once the command completes. Failure, a rejected submit or a timeout give False."""
        poll_interval = self.poll_interval if poll_interval is None else poll_interval
        timeout = self.timeout if timeout is None else timeout
        if not timeout or timeout <= 0:
            timeout = COMMAND_TIMEOUT

        # Trigger the command
        reply = self.submit(name, payload)
        if not reply.ok:
            self.log.error(f"Failed to trigger {name}: {reply.error or 'HTTP ' + str(reply.status)}")
            return False
        command = reply.data
        if command is None or command.id is None:
            self.log.error(f"{name}: command did not return a valid id")
            return False
        self.log.info(f"{name} queued (id={command.id})")

        # Poll the command status endpoint until it's no longer running
        start_time = self.clock()
        with self.log.status(name):
            while True:
                if self.clock() - start_time > timeout:
                    # The command may still finish on the server; we just stop waiting
                    self.log.error(f"Timeout waiting for {name} (id={command.id}) after {timeout:.0f}s")
                    return False

                reply = self.status(command.id)
                if reply.ok:
                    state = reply.data or CommandStatus.RUNNING
                    if state is CommandStatus.COMPLETED:
                        self.log.ok(name)
                        return True
                    if state is CommandStatus.FAILED:
                        self.log.error(f"{name} failed (id={command.id})")
                        return False
                    self.log.debug(f"{name}: {state.value}")
                elif reply.status == 404:
                    # A finished command can be cleared before we get to see it
                    self.log.ok(f"{name} (finished/cleared)")
                    return True
                else:
                    self.log.debug(f"Status check for {name} failed, retrying")

                self.sleep(poll_interval)

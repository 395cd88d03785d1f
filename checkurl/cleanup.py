"""
Browser Cleanup - Terminates leftover browser processes after a run
"""

import logging
from typing import Iterable
import psutil

logger = logging.getLogger(__name__)

BROWSER_PROCESS_NAMES = ('chrome', 'chrome.exe', 'chromium', 'chromium-browser',
                         'headless_shell', 'google chrome')


def kill_browser_processes(names: Iterable[str] = BROWSER_PROCESS_NAMES,
                           timeout: float = 5.0) -> int:
    """
    Terminate every process whose name matches one of `names`

    This affects all matching processes on the host, not only the ones
    started by this run, so callers must opt in explicitly.

    Returns:
        int: Number of processes terminated
    """
    wanted = {name.lower() for name in names}
    victims = []

    for proc in psutil.process_iter(['name']):
        name = (proc.info.get('name') or '').lower()
        if name not in wanted:
            continue
        try:
            proc.terminate()
            victims.append(proc)
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.warning(f"Failed to terminate {name} ({proc.pid}): {e}")

    _, alive = psutil.wait_procs(victims, timeout=timeout)
    for proc in alive:
        try:
            proc.kill()
        except (psutil.NoSuchProcess, psutil.AccessDenied) as e:
            logger.warning(f"Failed to kill process {proc.pid}: {e}")

    if victims:
        logger.info(f"Cleaned up {len(victims)} browser processes")
    else:
        logger.info("No browser processes to clean up")
    return len(victims)

"""
Unit tests for the cube service.
"""

import threading
import time
import unittest

from cubesim.exceptions import SolverFailed

from app.services.cube_service import CubeService


class SlowBackend:
    """Thread backend that sleeps and records how many calls overlap."""

    def __init__(self, delay):
        self.delay = delay
        self.calls = 0
        self.running = 0
        self.peak = 0
        self._lock = threading.Lock()

    def __call__(self, facelets):
        with self._lock:
            self.calls += 1
            self.running += 1
            self.peak = max(self.peak, self.running)
        try:
            time.sleep(self.delay)
        finally:
            with self._lock:
                self.running -= 1
        return "Rprime"


class TestCubeServiceSolve(unittest.IsolatedAsyncioTestCase):
    """Test cases for serialized solver calls."""

    async def test_solution(self):
        """Test a backend that answers in time."""
        service = CubeService(backend=lambda facelets: "Rprime", timeout=5)
        response = await service.solve(["R"])
        self.assertEqual(response.solution, ["R'"])
        self.assertFalse(response.already_solved)

    async def test_timed_out_call_keeps_lock(self):
        """Test that a timed-out backend call still blocks the next one."""
        backend = SlowBackend(delay=0.3)
        service = CubeService(backend=backend, timeout=0.05)

        with self.assertRaises(SolverFailed):
            await service.solve(["R"])
        with self.assertRaises(SolverFailed):
            await service.solve(["R"])

        await service.wait_idle()
        self.assertEqual(backend.calls, 2)
        self.assertEqual(backend.peak, 1)

    async def test_lock_released_after_timeout(self):
        """Test that the service answers again once the slow call is done."""
        backend = SlowBackend(delay=0.2)
        service = CubeService(backend=backend, timeout=0.05)

        with self.assertRaises(SolverFailed):
            await service.solve(["U"])
        await service.wait_idle()

        service.timeout = 5
        response = await service.solve(["R"])
        self.assertEqual(response.solution, ["R'"])
        self.assertEqual(backend.peak, 1)

    async def test_already_solved_skips_backend(self):
        """Test that a solved cube releases the lock without a backend call."""
        backend = SlowBackend(delay=0.0)
        service = CubeService(backend=backend, timeout=1)
        response = await service.solve([])
        self.assertTrue(response.already_solved)
        await service.wait_idle()
        self.assertEqual(backend.calls, 0)


if __name__ == '__main__':
    unittest.main()

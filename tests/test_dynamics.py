import math
import unittest

from rubik_motion.dynamics import SNAP_EPSILON, SecondOrderParameters, SecondOrderSystem


class TestSecondOrderSystem(unittest.TestCase):
    def test_coefficients_from_parameters(self):
        sys = SecondOrderSystem(SecondOrderParameters(freq=1.0, zeta=0.5, r=2.0), 0.0)
        self.assertAlmostEqual(sys.k1, 0.5 / math.pi)
        self.assertAlmostEqual(sys.k2, 1.0 / (4.0 * math.pi * math.pi))
        self.assertAlmostEqual(sys.k3, 1.0 / (2.0 * math.pi))

    def test_starts_at_initial_value(self):
        sys = SecondOrderSystem(SecondOrderParameters(freq=2.0, zeta=1.0, r=0.0), 3.5)
        self.assertEqual(sys.value(), 3.5)
        self.assertEqual(sys.velocity, 0.0)

    def test_converges_monotonically_then_snaps(self):
        sys = SecondOrderSystem(SecondOrderParameters(freq=1.0, zeta=2.0, r=0.0), 0.0)
        target = 1.0
        errors = [abs(sys.value() - target)]
        for _ in range(5000):
            sys.update(0.01, target)
            errors.append(abs(sys.value() - target))
            if errors[-1] == 0.0:
                break

        self.assertEqual(sys.value(), target)
        # The first step only builds velocity.
        self.assertLessEqual(errors[1], errors[0])
        for prev, nxt in zip(errors[1:-1], errors[2:]):
            self.assertLess(nxt, prev)

    def test_stays_on_target_after_snap(self):
        sys = SecondOrderSystem(SecondOrderParameters(freq=1.0, zeta=2.0, r=0.0), 0.0)
        for _ in range(5000):
            sys.update(0.01, 1.0)
        for _ in range(10):
            sys.update(0.01, 1.0)
            self.assertEqual(sys.value(), 1.0)
            self.assertEqual(sys.velocity, 0.0)

    def test_snaps_within_epsilon(self):
        sys = SecondOrderSystem(SecondOrderParameters(freq=1.0, zeta=1.0, r=0.0), 0.0)
        target = SNAP_EPSILON / 2.0
        sys.update_with_speed(0.016, target, 5.0)
        self.assertEqual(sys.value(), target)
        self.assertEqual(sys.velocity, 0.0)

    def test_underdamped_overshoots(self):
        sys = SecondOrderSystem(SecondOrderParameters(freq=1.0, zeta=0.3, r=0.0), 0.0)
        peak = 0.0
        for _ in range(1000):
            sys.update(0.01, 1.0)
            peak = max(peak, sys.value())
        self.assertGreater(peak, 1.0)

    def test_zero_timestep_does_not_move(self):
        sys = SecondOrderSystem(SecondOrderParameters(freq=1.0, zeta=1.0, r=1.0), 0.0)
        sys.update(0.0, 10.0)
        self.assertEqual(sys.value(), 0.0)

    def test_response_factor_reacts_to_input_speed(self):
        params_fast = SecondOrderParameters(freq=1.0, zeta=1.0, r=2.0)
        params_none = SecondOrderParameters(freq=1.0, zeta=1.0, r=0.0)
        a = SecondOrderSystem(params_fast, 0.0)
        b = SecondOrderSystem(params_none, 0.0)
        for i in range(1, 20):
            a.update(0.01, i * 0.01)
            b.update(0.01, i * 0.01)
        self.assertGreater(a.value(), b.value())


if __name__ == "__main__":
    unittest.main()

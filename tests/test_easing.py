import unittest

from rubik_motion.easing import ease


class TestEase(unittest.TestCase):
    SLOPES = (0.5, 1.0, 2.0, 3.5, 8.0)

    def test_endpoints_and_midpoint(self):
        for a in self.SLOPES:
            self.assertEqual(ease(0.0, a), 0.0, msg=f"a={a}")
            self.assertEqual(ease(1.0, a), 1.0, msg=f"a={a}")
            self.assertEqual(ease(0.5, a), 0.5, msg=f"a={a}")

    def test_monotonic_over_unit_interval(self):
        for a in self.SLOPES:
            values = [ease(i / 200.0, a) for i in range(201)]
            for prev, nxt in zip(values[:-1], values[1:]):
                self.assertLessEqual(prev, nxt, msg=f"a={a}")

    def test_symmetric_about_half(self):
        for a in self.SLOPES:
            for i in range(11):
                t = i / 10.0
                self.assertAlmostEqual(ease(t, a) + ease(1.0 - t, a), 1.0, places=12)

    def test_slope_one_is_linear(self):
        for i in range(11):
            t = i / 10.0
            self.assertAlmostEqual(ease(t, 1.0), t, places=12)

    def test_larger_slope_flattens_the_start(self):
        self.assertLess(ease(0.2, 4.0), ease(0.2, 2.0))
        self.assertGreater(ease(0.8, 4.0), ease(0.8, 2.0))


if __name__ == "__main__":
    unittest.main()

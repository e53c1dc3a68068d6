import unittest

from ecalc.lang.environment import Environment
from ecalc.lang.error import EvaluationError, UndefinedVariableError
from ecalc.pure.values import NIL, Alias, Float, Integer, Kind


class EnvironmentTestCase(unittest.TestCase):

    def setUp(self):
        self.env = Environment()

    def test_assign(self):
        self.assertRaises(UndefinedVariableError, self.env.get, "x")
        self.assertRaises(UndefinedVariableError, self.env.lookup, "x")

        self.env.assign("x", Integer(5))
        self.assertEqual(Integer(5), self.env.lookup("x"))

        self.env.assign("x", Float(1.5))
        self.assertEqual(Float(1.5), self.env.lookup("x"))
        self.assertEqual(1, len(self.env))
        self.assertIn("x", self.env)

        self.assertRaises(EvaluationError, self.env.assign, "y", Alias("x", Kind.FLOAT))
        self.assertNotIn("y", self.env)

    def test_alias_reads_current_value(self):
        self.env.assign("x", Integer(5))
        self.assertEqual(Alias("x", Kind.INTEGER), self.env.alias("y", "x"))
        self.assertEqual(Integer(5), self.env.lookup("y"))

        self.env.assign("x", Integer(7))
        self.assertEqual(Integer(7), self.env.lookup("y"))

        self.env.assign("y", Integer(1))  # assigning drops the alias
        self.assertFalse(self.env.get("y").is_alias)
        self.assertEqual(Integer(7), self.env.lookup("x"))

    def test_stale_alias(self):
        self.env.assign("x", Integer(5))
        self.env.alias("y", "x")

        should_raise = [Float(2.5), NIL]
        for value in should_raise:
            self.env.assign("x", value)
            self.assertRaises(EvaluationError, self.env.lookup, "y")

        self.env.assign("x", Integer(9))
        self.assertEqual(Integer(9), self.env.lookup("y"))

    def test_alias_chains(self):
        self.env.assign("a", Integer(1))
        self.env.assign("b", Integer(2))

        self.env.alias("y", "a")
        self.env.alias("z", "y")  # collapses to a
        self.assertEqual(Alias("a", Kind.INTEGER), self.env.get("z"))

        self.env.alias("a", "b")  # y still points at a, which now reads b
        self.assertEqual(Integer(2), self.env.lookup("y"))
        self.assertEqual(Integer(2), self.env.lookup("z"))

    def test_invalid_alias(self):
        self.assertRaises(UndefinedVariableError, self.env.alias, "y", "x")
        self.assertNotIn("y", self.env)

        self.env.assign("x", Integer(1))
        self.assertRaises(EvaluationError, self.env.alias, "x", "x")

        self.env.alias("y", "x")
        self.assertRaises(EvaluationError, self.env.alias, "x", "y")
        self.assertEqual(Integer(1), self.env.get("x"))


if __name__ == '__main__':
    unittest.main()

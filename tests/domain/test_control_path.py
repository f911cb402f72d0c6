import unittest

from src.venum.domain.utils import create_path_builder


class TestCreatePathBuilder(unittest.TestCase):
    def setUp(self) -> None:
        # Fresh builder per test to avoid registry sharing across tests.
        self.decorator = create_path_builder()

    def test_state_must_be_hashable(self) -> None:
        class C:
            @property
            def _state(self):
                return "A"

            def foo(self, x: int) -> int:
                return x

        with self.assertRaises(TypeError) as ctx:
            self.decorator(C, C.foo, ["not-hashable"])(lambda self, x: x)

        self.assertIn("must be hashable", str(ctx.exception))

    def test_dispatch_selects_registered_control_path(self) -> None:
        class C:
            def __init__(self, st):
                self.__st = st

            @property
            def _state(self):
                return self.__st

            def foo(self, x: int) -> int:
                return -999

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 10

        @self.decorator(C, C.foo, "B")
        def foo_B(self, x: int) -> int:
            return x + 20

        self.assertEqual(C("A").foo(1), 11)
        self.assertEqual(C("B").foo(1), 21)

    def test_implementation_receives_the_instance(self) -> None:
        class C:
            _state = "A"

            def __init__(self, value):
                self.value = value

            def foo(self) -> int:
                return -999

        @self.decorator(C, C.foo, "A")
        def foo_A(self) -> int:
            return self.value * 2

        self.assertEqual(C(21).foo(), 42)

    def test_dispatcher_keeps_method_metadata(self) -> None:
        class C:
            _state = "A"

            def foo(self) -> int:
                """Base docstring."""
                return 0

        @self.decorator(C, C.foo, "A")
        def foo_A(self) -> int:
            return 1

        self.assertEqual(C.foo.__name__, "foo")
        self.assertEqual(C.foo.__doc__, "Base docstring.")

    def test_missing_state_attribute_raises_not_implemented(self) -> None:
        class C:
            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(NotImplementedError) as ctx:
            C().foo(1)

        self.assertIn("'_state'", str(ctx.exception))

    def test_missing_control_path_raises_not_implemented(self) -> None:
        class C:
            def __init__(self, st):
                self.__st = st

            @property
            def _state(self):
                return self.__st

            def foo(self, x: int) -> int:
                return x

        @self.decorator(C, C.foo, "A")
        def foo_A(self, x: int) -> int:
            return x + 1

        with self.assertRaises(NotImplementedError) as ctx:
            C("B").foo(1)

        self.assertIn("Missing control path", str(ctx.exception))
        self.assertIn("state='B'", str(ctx.exception))

    def test_trap_exception_instance_is_raised(self) -> None:
        class MissingPathError(Exception):
            pass

        class C:
            _state = "B"

            def foo(self) -> int:
                return 0

        @self.decorator(C, C.foo, "A", MissingPathError("no path"))
        def foo_A(self) -> int:
            return 1

        with self.assertRaises(MissingPathError):
            C().foo()

    def test_trap_exception_callable_is_called_before_raising(self) -> None:
        calls = []

        class C:
            _state = "B"

            def foo(self) -> int:
                return 0

        @self.decorator(C, C.foo, "A", lambda method, state: calls.append((method.__name__, state)))
        def foo_A(self) -> int:
            return 1

        with self.assertRaises(NotImplementedError):
            C().foo()
        self.assertEqual(calls, [("foo", "B")])

    def test_builders_do_not_share_registries(self) -> None:
        other = create_path_builder()

        class C:
            _state = "A"

            def foo(self) -> int:
                return 0

        @self.decorator(C, C.foo, "A")
        def foo_A(self) -> int:
            return 1

        @other(C, C.foo, "B")
        def foo_B(self) -> int:
            return 2

        # the last installed dispatcher belongs to `other`, which has no "A" path
        with self.assertRaises(NotImplementedError):
            C().foo()

    def test_custom_state_attribute(self) -> None:
        builder = create_path_builder("mode")

        class C:
            mode = "fast"

            def foo(self) -> str:
                return "base"

        @builder(C, C.foo, "fast")
        def foo_fast(self) -> str:
            return "fast"

        self.assertEqual(C().foo(), "fast")


if __name__ == "__main__":
    unittest.main()

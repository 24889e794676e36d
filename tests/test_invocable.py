from funops.common.invocable import ConstantInvocable, as_invocable, describe


def test_callables_pass_through_unchanged():
    assert as_invocable(len) is len


def test_constants_become_invocable():
    constant = as_invocable([1, 2])
    assert isinstance(constant, ConstantInvocable)
    assert constant() == [1, 2]
    assert constant("any", thing="else") == [1, 2]
    assert constant.value == [1, 2]
    assert constant.__name__ == "constant([1, 2])"


def test_describe_names_functions():
    def local():
        pass

    assert describe(len) == "len"
    assert describe(local).endswith("test_describe_names_functions.<locals>.local")
    assert describe(as_invocable(3)).endswith("constant(3)")

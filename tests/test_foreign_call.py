from brillig.foreign_call import Array, ForeignCallResult, Single
from brillig.value import Value


def test_from_value_wraps_single():
    result = ForeignCallResult.from_value(Value(10))
    assert result.values == (Single(Value(10)),)


def test_from_values_wraps_one_array():
    values = [Value(1), Value(3), Value(2), Value(4)]
    result = ForeignCallResult.from_values(values)
    assert result.values == (Array(tuple(values)),)
    assert len(result.values) == 1


def test_from_outputs_keeps_outputs_in_order():
    outputs = [Single(Value(5)), Array([Value(1), Value(2)])]
    result = ForeignCallResult.from_outputs(outputs)
    assert result.values == tuple(outputs)


def test_array_accepts_list_and_tuple_equally():
    assert Array([Value(1), Value(2)]) == Array((Value(1), Value(2)))
    assert Array([Value(1)]).values == (Value(1),)


def test_results_compare_by_content():
    assert ForeignCallResult.from_value(Value(1)) == ForeignCallResult([Single(Value(1))])
    assert ForeignCallResult.from_value(Value(1)) != ForeignCallResult.from_values([Value(1)])


def test_from_values_consumes_generator():
    result = ForeignCallResult.from_values(Value(i) for i in range(3))
    assert result.values[0].values == (Value(0), Value(1), Value(2))
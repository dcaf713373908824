# SPDX-License-Identifier: Apache-2.0

"""
Helpers to run converted models with onnxruntime and compare
their outputs with the outputs of the original models.
"""
import numpy
from numpy.testing import assert_almost_equal, assert_array_equal


class OnnxRuntimeAssertionError(AssertionError):
    """
    Expected failure.
    """

    pass


def create_session(onnx_model):
    import onnxruntime

    try:
        return onnxruntime.InferenceSession(
            onnx_model.SerializeToString(), providers=["CPUExecutionProvider"]
        )
    except Exception as e:
        raise OnnxRuntimeAssertionError(
            "Unable to load onnx model due to {0}\n{1}".format(e, onnx_model)
        )


def _make_feeds(sess, data):
    inputs = sess.get_inputs()
    if isinstance(data, dict):
        return data
    if len(inputs) == 1:
        return {inputs[0].name: data}
    raise OnnxRuntimeAssertionError(
        "The model has {0} inputs, a dictionary is expected.".format(len(inputs))
    )


def run_model(onnx_model, data):
    """
    Runs *onnx_model* on *data* (an array if the model has one
    input, a dictionary otherwise) and returns the list of outputs.
    """
    sess = create_session(onnx_model)
    feeds = _make_feeds(sess, data)
    try:
        return sess.run(None, feeds)
    except Exception as e:
        raise OnnxRuntimeAssertionError(
            "Unable to run onnx model due to {0}".format(e)
        )


def zipmap_to_array(probabilities, classes):
    """
    Converts the output of ZipMap, a list of dictionaries,
    into an array [N, n_classes] ordered like *classes*.
    """
    return numpy.array([[row[c] for c in classes] for row in probabilities])


def compare_transform(model, onnx_model, data, feeds=None, decimal=5):
    """
    Compares *model.transform(data)* with the only output of the
    converted model.
    """
    expected = model.transform(data)
    got = run_model(onnx_model, data if feeds is None else feeds)
    if len(got) != 1:
        raise OnnxRuntimeAssertionError("Expected one output, got %d." % len(got))
    assert_almost_equal(
        numpy.asarray(expected, dtype=numpy.float32).reshape(got[0].shape),
        got[0],
        decimal=decimal,
    )


def compare_regressor(model, onnx_model, data, decimal=4):
    expected = model.predict(data)
    got = run_model(onnx_model, data)
    assert_almost_equal(
        expected.ravel().astype(numpy.float32), got[0].ravel(), decimal=decimal
    )


def compare_classifier(model, onnx_model, data, feeds=None, decimal=4, proba=True):
    """
    Compares labels and, if *proba* is True, probabilities.
    """
    got = run_model(onnx_model, data if feeds is None else feeds)
    assert_array_equal(model.predict(data), got[0])
    if not proba:
        return
    expected_proba = model.predict_proba(data)
    got_proba = got[1]
    if isinstance(got_proba, list):
        got_proba = zipmap_to_array(got_proba, list(model.classes_))
    assert_almost_equal(expected_proba, got_proba, decimal=decimal)

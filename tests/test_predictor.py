#!filepath: tests/test_predictor.py
import pandas as pd
import pytest

from abalone_sagemaker.data_eng.engineer_features import make_features
from abalone_sagemaker.data_eng.write_data import encode_csv
from abalone_sagemaker.errors import ParseError
from abalone_sagemaker.eval.predictor import (
    RingsPredictor,
    decode_predictions,
    merge_predictions,
    predict_dataset,
)

from conftest import FakeEndpoint, make_raw_frame


# ================================================================
# decode_predictions()
# ================================================================
def test_decode_comma_line():
    assert decode_predictions("7.1,8.3,6.9") == [7.1, 8.3, 6.9]


def test_decode_one_per_line_with_trailing_newline():
    assert decode_predictions("7.1\n8.3\n6.9\n") == [7.1, 8.3, 6.9]


def test_decode_bytes_and_whitespace():
    assert decode_predictions(b" 10.5 , 3\r\n") == [10.5, 3.0]


def test_decode_empty():
    assert decode_predictions("") == []
    assert decode_predictions("\n") == []


def test_round_trip_with_encoder():
    text = encode_csv(pd.DataFrame({"p": [1.0, 2.0, 3.0]}))

    assert decode_predictions(text) == [1.0, 2.0, 3.0]


@pytest.mark.parametrize("text", ["7.1,abc,6.9", "7.1,,6.9", "nan,1", "1,inf", "<html>error</html>", "1_0,2", "1e999", "\u0664,1"])
def test_decode_rejects_bad_tokens(text):
    with pytest.raises(ParseError):
        decode_predictions(text)


def test_decode_accepts_signs_and_exponents():
    assert decode_predictions("-1.5,+2,.5,3.,1e1,2E-1") == [-1.5, 2.0, 0.5, 3.0, 10.0, 0.2]


def test_decode_rejects_invalid_utf8():
    with pytest.raises(ParseError):
        decode_predictions(b"\xff\xfe")


# ================================================================
# predict_dataset() / merge_predictions()
# ================================================================
@pytest.fixture
def scored_frame() -> pd.DataFrame:
    return make_features(make_raw_frame(1203, seed=9))


def test_predict_dataset_caps_batches_and_drops_label(scored_frame, endpoint):
    values = predict_dataset(endpoint, scored_frame, max_rows=500)

    assert len(values) == len(scored_frame)
    assert [len(p.splitlines()) for p in endpoint.payloads] == [500, 500, 203]
    assert set(endpoint.content_types) == {"text/csv"}
    for payload in endpoint.payloads:
        assert all(len(line.split(",")) == 10 for line in payload.splitlines())

    # fake endpoint predicts the row sum; order must survive batching
    expected = scored_frame.drop(columns=["rings"]).sum(axis=1).tolist()
    assert values == pytest.approx(expected)


def test_predict_dataset_length_mismatch(scored_frame):
    with pytest.raises(ParseError):
        predict_dataset(FakeEndpoint(drop_last=True), scored_frame.iloc[:10])


def test_predict_dataset_empty_frame(scored_frame, endpoint):
    assert predict_dataset(endpoint, scored_frame.iloc[0:0]) == []
    assert endpoint.payloads == []


def test_merge_predictions(scored_frame):
    head = scored_frame.iloc[:4]

    out = merge_predictions(head, [1.0, 2.0, 3.0, 4.0])

    assert list(out.columns) == ["predicted_rings", *head.columns]
    assert out["predicted_rings"].tolist() == [1.0, 2.0, 3.0, 4.0]
    assert "predicted_rings" not in head.columns


def test_merge_predictions_mismatch(scored_frame):
    with pytest.raises(ParseError):
        merge_predictions(scored_frame.iloc[:4], [1.0])


def test_rings_predictor(scored_frame, endpoint):
    predictor = RingsPredictor(endpoint=endpoint, max_rows=100)

    out = predictor.run(scored_frame.iloc[:250])

    assert len(out) == 250
    assert len(endpoint.payloads) == 3
    assert predictor.metrics["n"] == 250
    assert predictor.predictions is out

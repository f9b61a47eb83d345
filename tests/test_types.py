from datetime import datetime, timezone

import pytest

from imgeraser.scheme import V1, V1ALPHA1, Scheme
from imgeraser.types import (
    Image,
    ImageJob,
    ImageJobList,
    ImageJobStatus,
    ImageList,
    ImageListList,
    ImageListSpec,
    ImageListStatus,
    JobPhase,
    ListMeta,
    ObjectMeta,
    add_to_scheme,
)

ALPINE = "docker.io/library/alpine:3.7.3"


def test_image_omits_empty_lists():
    assert Image("sha256:abc").to_dict() == {"image_id": "sha256:abc"}


def test_image_round_trip():
    image = Image("sha256:abc", names=[ALPINE], digests=["sha256:def"])
    assert Image.from_dict(image.to_dict()) == image


def test_job_phase_values():
    assert [phase.value for phase in JobPhase] == ["Running", "Completed", "Failed"]
    assert JobPhase("Failed") is JobPhase.FAILED


def test_imagejob_round_trip():
    job = ImageJob(
        metadata=ObjectMeta(name="imagejob-abc", labels={"app": "eraser"}),
        status=ImageJobStatus(
            failed=1,
            succeeded=2,
            desired=3,
            skipped=0,
            phase=JobPhase.COMPLETED,
            delete_after=datetime(2023, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        ),
    )
    data = job.to_dict()
    assert data["kind"] == "ImageJob"
    assert data["status"]["phase"] == "Completed"
    assert data["status"]["deleteAfter"] == "2023-01-02T03:04:05Z"
    assert ImageJob.from_dict(data) == job


def test_imagejob_status_defaults():
    status = ImageJob().to_dict()["status"]
    assert "deleteAfter" not in status
    assert status["phase"] == ""
    assert ImageJob.from_dict(ImageJob().to_dict()) == ImageJob()


def test_unknown_phase_rejected():
    with pytest.raises(ValueError):
        ImageJob.from_dict({"kind": "ImageJob", "status": {"phase": "Bogus"}})


def test_kind_mismatch_rejected():
    with pytest.raises(ValueError):
        ImageJob.from_dict({"kind": "ImageList"})


def test_imagelist_null_timestamp():
    data = ImageList(spec=ImageListSpec(images=[ALPINE])).to_dict()
    assert data["status"]["timestamp"] is None
    assert data["spec"] == {"images": [ALPINE]}


def test_imagelist_round_trip():
    image_list = ImageList(
        metadata=ObjectMeta(name="imagelist"),
        spec=ImageListSpec(images=[ALPINE, "*"]),
        status=ImageListStatus(
            timestamp=datetime(2022, 6, 1, 12, 0, 0, tzinfo=timezone.utc),
            success=3,
            failed=1,
            skipped=2,
        ),
        api_version=V1ALPHA1.api_version,
    )
    assert ImageList.from_dict(image_list.to_dict()) == image_list


def test_job_list_round_trip():
    jobs = ImageJobList(
        items=[ImageJob(metadata=ObjectMeta(name="a")), ImageJob(metadata=ObjectMeta(name="b"))],
        metadata=ListMeta(resource_version="7", remaining_item_count=0),
    )
    data = jobs.to_dict()
    assert [item["metadata"]["name"] for item in data["items"]] == ["a", "b"]
    assert ImageJobList.from_dict(data) == jobs


def test_image_list_list_round_trip():
    lists = ImageListList(items=[ImageList(spec=ImageListSpec(images=[ALPINE]))])
    assert ImageListList.from_dict(lists.to_dict()) == lists


def test_add_to_scheme_registers_both_versions():
    scheme = Scheme()
    add_to_scheme(scheme)
    expected = {
        "ImageJob": ImageJob,
        "ImageJobList": ImageJobList,
        "ImageList": ImageList,
        "ImageListList": ImageListList,
    }
    for group_version in (V1, V1ALPHA1):
        for kind, cls in expected.items():
            assert scheme.lookup(group_version.api_version, kind) is cls


def test_decode_v1alpha1_imagelist():
    scheme = Scheme()
    add_to_scheme(scheme)
    obj = scheme.decode(
        {
            "apiVersion": "eraser.sh/v1alpha1",
            "kind": "ImageList",
            "metadata": {"name": "imagelist"},
            "spec": {"images": [ALPINE]},
        }
    )
    assert isinstance(obj, ImageList)
    assert obj.api_version == "eraser.sh/v1alpha1"
    assert obj.metadata.name == "imagelist"
    assert obj.spec.images == [ALPINE]
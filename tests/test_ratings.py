import uuid

import pytest

from pictureteam.models import Rating
from pictureteam.services.ratings import DefaultRatingService
from pictureteam.utils.exceptions import ImageNotFoundError, InvalidRatingError, OwnImageError


@pytest.fixture
def image(services, make_user):
    owner = make_user("owner@example.com")
    return owner, services.images.create(owner, "Forest", None, [])


def test_rate_own_image(services, image):
    owner, image_id = image

    with pytest.raises(OwnImageError):
        services.ratings.rate(image_id, owner, 3)


@pytest.mark.parametrize("value", [0, 6, -1, 100])
def test_rate_out_of_range(services, make_user, image, value):
    _, image_id = image

    with pytest.raises(InvalidRatingError):
        services.ratings.rate(image_id, make_user(), value)


def test_rate_missing_image(services, make_user):
    with pytest.raises(ImageNotFoundError):
        services.ratings.rate(uuid.uuid4(), make_user(), 3)


def test_rate_upserts(services, session_factory, make_user, image):
    _, image_id = image
    rater = make_user()

    services.ratings.rate(image_id, rater, 3)
    services.ratings.rate(image_id, rater, 5)

    with session_factory() as db:
        rows = db.query(Rating).filter(Rating.image_id == image_id).all()
    assert [(r.app_user_id, r.rating) for r in rows] == [(rater, 5)]


def test_ratings_summary(services, make_user, image):
    _, image_id = image
    for value in (2, 3, 5):
        services.ratings.rate(image_id, make_user(), value)

    summary = services.ratings.ratings(image_id)

    assert summary.count == 3
    assert summary.average == pytest.approx(10 / 3)


def test_ratings_without_any(services, image):
    _, image_id = image

    summary = services.ratings.ratings(image_id)

    assert summary.count == 0
    assert summary.average == 0


def test_ratings_missing_image(services):
    with pytest.raises(ImageNotFoundError):
        services.ratings.ratings(uuid.uuid4())


def test_user_averages(services, make_user, image):
    owner, image_id = image
    rater = make_user("rater@example.com")
    second = services.images.create(owner, "Lake", None, [])
    services.ratings.rate(image_id, rater, 4)
    services.ratings.rate(second, rater, 1)

    averages = {r.email: r.average_rating for r in services.ratings.user_averages()}

    assert averages == {"owner@example.com": 2.5, "rater@example.com": None}


class InterleavedRatingService(DefaultRatingService):
    """Commits a rating by the same user after the checks, right before our write."""

    def __init__(self, session_factory, competing_value):
        super().__init__(session_factory)
        self._competing_value = competing_value

    def _upsert(self, db, image_id, rater_id, value):
        with self._session_factory() as other:
            other.add(Rating(app_user_id=rater_id, image_id=image_id, rating=self._competing_value))
            other.commit()
        super()._upsert(db, image_id, rater_id, value)


def test_rate_overwrites_concurrently_inserted_rating(session_factory, make_user, image):
    _, image_id = image
    rater = make_user()
    racing = InterleavedRatingService(session_factory, competing_value=2)

    racing.rate(image_id, rater, 5)

    with session_factory() as db:
        rows = db.query(Rating).filter(Rating.image_id == image_id).all()
    assert [(r.app_user_id, r.rating) for r in rows] == [(rater, 5)]

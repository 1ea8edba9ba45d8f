import pytest
from fastapi import HTTPException
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from conftest import auth_for, make_course
from langschool.api.hero import create_hero_slide, get_hero_slides, move_hero_slide, update_hero_slide
from langschool.api.statistics import (
    create_statistic,
    get_statistics,
    move_statistic,
    reorder_statistics,
    update_statistic,
)
from langschool.core.errors import ApiError
from langschool.core.ordering import STALE_MESSAGE, apply_order, move_item, next_order_index
from langschool.database import Base
from langschool.models import CourseModule, Statistic
from langschool.schemas.content import (
    HeroSlideCreate,
    HeroSlideUpdate,
    MoveRequest,
    ReorderItem,
    ReorderRequest,
    StatisticCreate,
    StatisticUpdate,
)


@pytest.fixture
def statistics(db, admin):
    auth = auth_for(admin)
    return [
        create_statistic(StatisticCreate(title=title, title_fa=title, value=value), db=db, auth=auth)
        for title, value in (('Students', '1500+'), ('Teachers', '25'), ('Courses', '40'))
    ]


def titles(items):
    return [item.title for item in items]


def test_new_items_are_appended(db, statistics) -> None:
    assert [s.order_index for s in statistics] == [0, 1, 2]
    assert next_order_index(db, Statistic) == 3


def test_move_up_swaps_with_previous(db, admin, statistics) -> None:
    moved = move_statistic(id=statistics[1].id, payload=MoveRequest(direction='up'), db=db, auth=auth_for(admin))

    assert titles(moved) == ['Teachers', 'Students', 'Courses']
    assert [s.order_index for s in moved] == [0, 1, 2]


def test_move_first_item_up_changes_nothing(db, admin, statistics) -> None:
    moved = move_statistic(id=statistics[0].id, payload=MoveRequest(direction='up'), db=db, auth=auth_for(admin))

    assert titles(moved) == ['Students', 'Teachers', 'Courses']


def test_move_rejects_unknown_direction(db, admin, statistics) -> None:
    with pytest.raises(HTTPException) as exc:
        move_statistic(id=statistics[0].id, payload=MoveRequest(direction='left'), db=db, auth=auth_for(admin))

    assert exc.value.status_code == 400


def test_move_with_outdated_version_conflicts(db, admin, statistics) -> None:
    stale_version = statistics[2].version
    move_statistic(id=statistics[2].id, payload=MoveRequest(direction='up'), db=db, auth=auth_for(admin))

    with pytest.raises(ApiError) as exc:
        move_statistic(
            id=statistics[2].id,
            payload=MoveRequest(direction='up', version=stale_version),
            db=db,
            auth=auth_for(admin),
        )

    assert exc.value.status_code == 409
    assert exc.value.detail == STALE_MESSAGE


def test_tied_indices_are_renumbered(db, admin, statistics) -> None:
    for row in db.query(Statistic).all():
        row.order_index = 0
    db.commit()

    moved = move_item(db, Statistic, statistics[2].id, 'up', label='Statistic')

    assert titles(moved) == ['Students', 'Courses', 'Teachers']
    assert [s.order_index for s in moved] == [0, 1, 2]


def test_bulk_reorder(db, admin, statistics) -> None:
    items = [ReorderItem(id=s.id, order_index=2 - i) for i, s in enumerate(statistics)]

    reorder_statistics(ReorderRequest(items=items), db=db, auth=auth_for(admin))

    assert titles(get_statistics(id=None, active_only=False, db=db)) == ['Courses', 'Teachers', 'Students']


def test_bulk_reorder_with_unknown_id_changes_nothing(db, statistics) -> None:
    with pytest.raises(HTTPException) as exc:
        apply_order(db, Statistic, [(statistics[0].id, 5), (999, 0)], label='Statistic')

    assert exc.value.status_code == 404
    assert exc.value.detail == 'Statistic 999 not found'
    db.expire_all()
    assert [s.order_index for s in db.query(Statistic).order_by(Statistic.id)] == [0, 1, 2]


def test_modules_move_within_their_course(db, teacher) -> None:
    course_a = make_course(db, teacher)
    course_b = make_course(db, teacher, title='German A2')
    for course in (course_a, course_b):
        for title in ('Intro', 'Grammar'):
            db.add(CourseModule(
                course_id=course.id,
                title=title,
                title_fa=title,
                order_index=next_order_index(db, CourseModule, course_id=course.id),
            ))
            db.flush()
    db.commit()
    grammar_b = db.query(CourseModule).filter_by(course_id=course_b.id, title='Grammar').one()

    moved = move_item(db, CourseModule, grammar_b.id, 'up', scope_fields=('course_id',), label='Module')

    assert [(m.course_id, m.title) for m in moved] == [(course_b.id, 'Grammar'), (course_b.id, 'Intro')]


def test_hero_update_checks_version(db, admin) -> None:
    slide = create_hero_slide(
        HeroSlideCreate(title='Willkommen', title_fa='خوش آمدید', image_url='/hero.jpg'),
        db=db,
        auth=auth_for(admin),
    )
    update_hero_slide(id=slide.id, payload=HeroSlideUpdate(title='Hallo'), version=slide.version, db=db, auth=auth_for(admin))

    with pytest.raises(ApiError) as exc:
        update_hero_slide(id=slide.id, payload=HeroSlideUpdate(title='Oops'), version=slide.version, db=db, auth=auth_for(admin))

    assert exc.value.status_code == 409
    assert [s.title for s in get_hero_slides(id=None, include_inactive=False, db=db)] == ['Hallo']


def test_hero_slide_moves_down(db, admin) -> None:
    auth = auth_for(admin)
    first = create_hero_slide(HeroSlideCreate(title='One', title_fa='1', image_url='/1.jpg'), db=db, auth=auth)
    create_hero_slide(HeroSlideCreate(title='Two', title_fa='2', image_url='/2.jpg'), db=db, auth=auth)

    moved = move_hero_slide(id=first.id, payload=MoveRequest(direction='down'), db=db, auth=auth)

    assert [s.title for s in moved] == ['Two', 'One']


@pytest.fixture
def two_admin_sessions(tmp_path):
    """Two sessions on one file database, holding the same two statistics"""
    engine = create_engine(f"sqlite:///{tmp_path / 'race.db'}")
    Base.metadata.create_all(bind=engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    setup = Session()
    setup.add_all([
        Statistic(title='A', title_fa='A', value='1', order_index=0),
        Statistic(title='B', title_fa='B', value='2', order_index=1),
    ])
    setup.commit()
    setup.close()

    first_admin = Session()
    second_admin = Session()
    yield first_admin, second_admin
    first_admin.close()
    second_admin.close()
    engine.dispose()


def edit_behind_back(first_admin, second_admin):
    """Load the list in the first session, then change its head in the second one"""
    loaded = first_admin.query(Statistic).order_by(Statistic.order_index).all()
    other_copy = second_admin.get(Statistic, loaded[0].id)
    other_copy.value = '100'
    second_admin.commit()
    return loaded


def test_concurrent_reorder_is_detected(two_admin_sessions) -> None:
    first_admin, second_admin = two_admin_sessions
    loaded = edit_behind_back(first_admin, second_admin)

    with pytest.raises(ApiError) as exc:
        move_item(first_admin, Statistic, loaded[0].id, 'down', label='Statistic')

    assert exc.value.status_code == 409


def test_concurrent_update_is_detected(two_admin_sessions, admin) -> None:
    first_admin, second_admin = two_admin_sessions
    loaded = edit_behind_back(first_admin, second_admin)

    with pytest.raises(ApiError) as exc:
        update_statistic(
            id=loaded[0].id,
            payload=StatisticUpdate(title='Renamed'),
            version=None,
            db=first_admin,
            auth=auth_for(admin),
        )

    assert exc.value.status_code == 409
    assert exc.value.extra == {'id': loaded[0].id}
    second_admin.expire_all()
    stored = second_admin.get(Statistic, loaded[0].id)
    assert (stored.title, stored.value) == ('A', '100')


def test_update_refuses_null_for_required_field(db, admin, statistics) -> None:
    with pytest.raises(ApiError) as exc:
        update_statistic(
            id=statistics[0].id,
            payload=StatisticUpdate(value=None, title='Kept?'),
            version=None,
            db=db,
            auth=auth_for(admin),
        )

    assert exc.value.status_code == 400
    assert exc.value.detail == 'Fields cannot be null: value'
    db.expire_all()
    stored = db.get(Statistic, statistics[0].id)
    assert (stored.title, stored.value) == ('Students', '1500+')


def test_update_bumps_version(db, admin, statistics) -> None:
    updated = update_statistic(
        id=statistics[0].id,
        payload=StatisticUpdate(value='2000+'),
        version=statistics[0].version,
        db=db,
        auth=auth_for(admin),
    )

    assert updated.value == '2000+'
    assert updated.version == statistics[0].version + 1

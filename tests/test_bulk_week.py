"""Массовые операции с шаблонами недели"""
from datetime import time

import pytest

from timetable.core.db_manager import db
from timetable.core.errors import AuthorizationError, NotFoundError, ValidationError
from timetable.models.schedule import PARITY_ANY, PARITY_EVEN, PARITY_ODD, LessonTemplate, ScheduleChange
from timetable.services.bulk_week import clear_week, copy_week, replace_teacher
from tests.conftest import get_user

FIELDS = ('day', 'start_time', 'end_time', 'subject', 'teacher', 'teacher_id', 'room', 'type')


def add_template(group_id, parity, day, start, subject, teacher_name='Иванов И.И.', teacher_id=None):
    template = LessonTemplate(
        group_id=group_id, parity=parity, day_of_week=day,
        start_time=start, end_time=time(start.hour + 1, start.minute),
        subject=subject, teacher_name=teacher_name, teacher_id=teacher_id, room='101', type='lecture'
    )
    db.session.add(template)
    db.session.commit()
    return template


def week_fields(group_id, parity):
    templates = db.session.query(LessonTemplate).filter_by(group_id=group_id, parity=parity).all()
    return sorted(tuple(t.to_dict()[f] for f in FIELDS) for t in templates)


@pytest.fixture
def week(seed, ctx):
    add_template(seed.group_id, PARITY_ODD, 0, time(8, 30), 'Математика', teacher_id=seed.teacher_id)
    add_template(seed.group_id, PARITY_ODD, 2, time(10, 15), 'Физика', 'Петров П.П.')
    add_template(seed.group_id, PARITY_ODD, 4, time(12, 0), 'История')
    add_template(seed.group_id, PARITY_EVEN, 1, time(8, 30), 'Химия')
    add_template(seed.group_id, PARITY_EVEN, 3, time(14, 0), 'Биология')
    add_template(seed.other_group_id, PARITY_EVEN, 1, time(8, 30), 'Химия')
    return seed


def test_copy_week_replaces_target(week):
    odd_before = week_fields(week.group_id, PARITY_ODD)

    count = copy_week(get_user(week.admin_id), week.group_id, PARITY_ODD, PARITY_EVEN)

    assert count == 3
    assert week_fields(week.group_id, PARITY_EVEN) == odd_before
    assert week_fields(week.group_id, PARITY_ODD) == odd_before
    # Другая группа не затронута
    assert len(week_fields(week.other_group_id, PARITY_EVEN)) == 1

    change = db.session.query(ScheduleChange).one()
    assert change.action_type == 'copy_week'
    assert change.new_value['from_week'] == PARITY_ODD
    assert change.new_value['to_week'] == PARITY_EVEN
    assert sorted(t['subject'] for t in change.old_value['templates']) == ['Биология', 'Химия']


def test_copy_week_same_parity_keeps_data(week):
    before = week_fields(week.group_id, PARITY_ODD)

    count = copy_week(get_user(week.admin_id), week.group_id, PARITY_ODD, PARITY_ODD)

    assert count == 3
    assert week_fields(week.group_id, PARITY_ODD) == before


def test_copy_week_accepts_string_parities(week):
    assert copy_week(get_user(week.admin_id), str(week.group_id), '2', '0') == 3
    assert len(week_fields(week.group_id, PARITY_ANY)) == 3


def test_copy_week_failure_keeps_target(week, failing_insert):
    even_before = week_fields(week.group_id, PARITY_EVEN)
    failing_insert.armed = True

    with pytest.raises(RuntimeError):
        copy_week(get_user(week.admin_id), week.group_id, PARITY_ODD, PARITY_EVEN)

    # Два чётных шаблона группы уже были удалены внутри транзакции
    assert failing_insert.templates == 4
    assert week_fields(week.group_id, PARITY_EVEN) == even_before
    assert len(week_fields(week.group_id, PARITY_ODD)) == 3
    assert db.session.query(ScheduleChange).count() == 0


def test_copy_empty_week_is_not_found(week):
    with pytest.raises(NotFoundError) as exc:
        copy_week(get_user(week.admin_id), week.group_id, PARITY_ANY, PARITY_EVEN)

    assert exc.value.message == 'Нет занятий для копирования'
    assert len(week_fields(week.group_id, PARITY_EVEN)) == 2
    assert db.session.query(ScheduleChange).count() == 0


@pytest.mark.parametrize('group_id, from_week, to_week, error', [
    (None, 2, 1, ValidationError),
    ('abc', 2, 1, ValidationError),
    (9999, 2, 1, NotFoundError),
    ('group', 2, 1, ValidationError),
    (1, 3, 1, ValidationError),
    (1, 2, None, ValidationError),
    (1, True, 1, ValidationError),
])
def test_copy_week_invalid_arguments(week, group_id, from_week, to_week, error):
    with pytest.raises(error):
        copy_week(get_user(week.admin_id), group_id, from_week, to_week)


def test_clear_week(week):
    count = clear_week(get_user(week.admin_id), week.group_id, PARITY_ODD)

    assert count == 3
    assert week_fields(week.group_id, PARITY_ODD) == []
    assert len(week_fields(week.group_id, PARITY_EVEN)) == 2

    change = db.session.query(ScheduleChange).one()
    assert change.action_type == 'clear_week'
    assert change.new_value == {'group_id': week.group_id, 'week': PARITY_ODD, 'count': 3}


def test_clear_empty_week_not_audited(week):
    assert clear_week(get_user(week.admin_id), week.group_id, PARITY_ANY) == 0
    assert db.session.query(ScheduleChange).count() == 0


def test_replace_teacher_exact_match_after_trim(week):
    add_template(week.group_id, PARITY_ANY, 5, time(9, 0), 'Английский', 'Иванов И.И. (совм.)')

    count = replace_teacher(get_user(week.admin_id), week.group_id, '  Иванов И.И. ', 'Сидоров С.С.')

    assert count == 4
    names = sorted(t.teacher_name for t in db.session.query(LessonTemplate).filter_by(group_id=week.group_id))
    assert names == ['Иванов И.И. (совм.)', 'Петров П.П.'] + ['Сидоров С.С.'] * 4
    # Шаблоны другой группы не меняются
    other = db.session.query(LessonTemplate).filter_by(group_id=week.other_group_id).one()
    assert other.teacher_name == 'Иванов И.И.'

    change = db.session.query(ScheduleChange).one()
    assert change.action_type == 'replace_teacher'
    assert len(change.new_value['template_ids']) == 4


def test_replace_unknown_teacher_changes_nothing(week):
    assert replace_teacher(get_user(week.admin_id), week.group_id, 'Нет Такого', 'Сидоров С.С.') == 0
    assert db.session.query(ScheduleChange).count() == 0


@pytest.mark.parametrize('old_teacher, new_teacher', [('', 'Сидоров'), ('Иванов И.И.', '   '), (None, 'Сидоров')])
def test_replace_teacher_requires_names(week, old_teacher, new_teacher):
    with pytest.raises(ValidationError):
        replace_teacher(get_user(week.admin_id), week.group_id, old_teacher, new_teacher)


@pytest.mark.parametrize('operation, args', [
    (copy_week, (PARITY_ODD, PARITY_EVEN)),
    (clear_week, (PARITY_ODD,)),
    (replace_teacher, ('Иванов И.И.', 'Сидоров С.С.')),
])
def test_bulk_operations_require_admin(week, operation, args):
    before = week_fields(week.group_id, PARITY_ODD)

    with pytest.raises(AuthorizationError):
        operation(get_user(week.teacher_id), week.group_id, *args)

    assert week_fields(week.group_id, PARITY_ODD) == before

from urllib.parse import urlencode

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for
from werkzeug.datastructures import MultiDict

from tablesort import db
from tablesort.headers import cell_is_active, header_cells
from tablesort.models import EntityTest
from tablesort.query import order_by_sort_state
from tablesort.sort_state import HeaderColumn, init_sort_state

bp = Blueprint('main', __name__)

ENTITY_HEADERS = [
    HeaderColumn(label='ID', field='id'),
    HeaderColumn(label='Name', field='name'),
    HeaderColumn(label='Type', field='type'),
    HeaderColumn(label='Created', field='created', default_direction='desc'),
    HeaderColumn(text='Operations'),
]

ENTITY_SORTABLE = {
    'id': EntityTest.id,
    'name': EntityTest.name,
    'type': EntityTest.type,
    'created': EntityTest.created,
}

ENTITY_NAME_MAX_LENGTH = 64
ENTITY_TYPE_MAX_LENGTH = 32


def _page_url(base_url, args, number):
    params = MultiDict(args)
    params.setlist('page', [str(number)])
    return f"{base_url}?{urlencode(list(params.items(multi=True)))}"


@bp.route('/')
def index():
    return redirect(url_for('main.entities_list'))


@bp.route('/entities')
def entities_list():
    state = init_sort_state(ENTITY_HEADERS, request.args)
    page = request.args.get('page', 1, type=int)
    per_page = max(1, current_app.config.get('ENTITY_LIST_PER_PAGE', 50))

    query = order_by_sort_state(EntityTest.query, state, ENTITY_SORTABLE)
    # Tie-break on id so equal sort values page deterministically.
    query = query.order_by(EntityTest.id)

    total_count = query.count()
    total_pages = max(1, (total_count + per_page - 1) // per_page)
    page = max(1, min(page, total_pages))
    entities = query.offset((page - 1) * per_page).limit(per_page).all()

    list_url = url_for('main.entities_list')
    page_urls = {
        number: _page_url(list_url, request.args, number)
        for number in range(1, total_pages + 1)
    }

    return render_template(
        'entities/list.html',
        entities=entities,
        headers=header_cells(ENTITY_HEADERS, state, list_url),
        active_columns=[cell_is_active(header, state) for header in ENTITY_HEADERS],
        sort_state=state,
        page=page,
        total_pages=total_pages,
        total_count=total_count,
        page_urls=page_urls,
    )


@bp.route('/entities/add', methods=['POST'])
def entities_add():
    name = request.form.get('name', '').strip()
    entity_type = request.form.get('type', '').strip() or 'entity_test'

    if not name:
        flash('Name is required.', 'error')
        return redirect(url_for('main.entities_list'))
    if len(name) > ENTITY_NAME_MAX_LENGTH:
        flash(f'Name must be at most {ENTITY_NAME_MAX_LENGTH} characters.', 'error')
        return redirect(url_for('main.entities_list'))
    if len(entity_type) > ENTITY_TYPE_MAX_LENGTH:
        flash(f'Type must be at most {ENTITY_TYPE_MAX_LENGTH} characters.', 'error')
        return redirect(url_for('main.entities_list'))

    entity = EntityTest(name=name, type=entity_type)
    db.session.add(entity)
    db.session.commit()
    current_app.logger.info("Created test entity id=%s type=%s", entity.id, entity.type)

    flash(f'Created test entity "{name}".', 'success')
    return redirect(url_for('main.entities_list'))

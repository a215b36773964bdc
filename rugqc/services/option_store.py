"""Option lists: static values plus user-added ones.

Two stores hold the user-added overlay. ``LocalOptionStore`` keeps
per-station lists (and the report recipient list) in a JSON file on the
station; ``DatabaseOptionStore`` keeps lists shared between stations.
Which store serves an option type is set by ``OPTION_STORE_BACKENDS``.
"""
import json
import logging
import os

from flask import current_app, g, has_request_context

from rugqc.constants import CUSTOMERS, STATIC_OPTIONS, EMAIL_RECIPIENTS_KEY
from rugqc.extensions import db
from rugqc.models.audit import AuditLog
from rugqc.models.options import Customer, CustomOption

logger = logging.getLogger(__name__)

CUSTOMERS_KEY = 'customers'
OPTION_TYPES = tuple(STATIC_OPTIONS) + (CUSTOMERS_KEY,)


class OptionStore:
    """Persistence for user-added option values."""

    def load(self, key):
        raise NotImplementedError

    def append(self, key, value):
        raise NotImplementedError


class LocalOptionStore(OptionStore):

    def __init__(self, path):
        self.path = path

    def _read(self):
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.error(f'Error reading local options {self.path}: {e}')
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp_path = f'{self.path}.tmp'
        with open(tmp_path, 'w', encoding='utf-8') as fh:
            json.dump(data, fh, indent=2, ensure_ascii=False)
        os.replace(tmp_path, self.path)

    def load(self, key):
        return list(self._read().get(key, []))

    def append(self, key, value):
        data = self._read()
        values = data.setdefault(key, [])
        if value not in values:
            values.append(value)
            self._write(data)
        return list(values)

    def replace(self, key, values):
        data = self._read()
        data[key] = list(values)
        self._write(data)
        return list(data[key])


class DatabaseOptionStore(OptionStore):

    def load(self, key):
        if key == CUSTOMERS_KEY:
            return [c.to_dict() for c in Customer.query.order_by(Customer.name).all()]
        rows = CustomOption.query.filter_by(option_type=key).order_by(CustomOption.id).all()
        return [r.value for r in rows]

    def append(self, key, value):
        user_name = _current_user_name()
        if key == CUSTOMERS_KEY:
            if not Customer.query.filter(db.func.lower(Customer.name) == value['name'].lower()).first():
                customer = Customer(name=value['name'], code=value['code'], created_by=user_name)
                db.session.add(customer)
                db.session.flush()
                AuditLog.log('customers', customer.id, 'INSERT', new_data=value)
                db.session.commit()
        elif not CustomOption.query.filter_by(option_type=key, value=value).first():
            option = CustomOption(option_type=key, value=value, created_by=user_name)
            db.session.add(option)
            db.session.flush()
            AuditLog.log('custom_options', option.id, 'INSERT', new_data={'option_type': key, 'value': value})
            db.session.commit()
        return self.load(key)


def _current_user_name():
    if has_request_context():
        return getattr(g, 'current_user', {}).get('user_name')
    return None


class OptionRegistry:
    """Static option lists merged with the overlay from the configured store."""

    def __init__(self, local_store, shared_store, backends):
        self.local_store = local_store
        self.stores = {'local': local_store, 'database': shared_store}
        self.backends = backends

    @classmethod
    def from_config(cls, config=None):
        config = config or current_app.config
        return cls(
            LocalOptionStore(config['LOCAL_OPTIONS_FILE']),
            DatabaseOptionStore(),
            config.get('OPTION_STORE_BACKENDS', {}),
        )

    def store_for(self, key):
        return self.stores[self.backends.get(key, 'local')]

    def options(self, key):
        if key not in OPTION_TYPES:
            raise KeyError(key)
        if key == CUSTOMERS_KEY:
            return self.customers()
        merged = []
        for value in list(STATIC_OPTIONS[key]) + self.store_for(key).load(key):
            if value not in merged:
                merged.append(value)
        return merged

    def add_option(self, key, value):
        if key not in OPTION_TYPES:
            raise KeyError(key)
        self.store_for(key).append(key, value)
        return self.options(key)

    def customers(self):
        by_name = {}
        for customer in CUSTOMERS + self.store_for(CUSTOMERS_KEY).load(CUSTOMERS_KEY):
            by_name.setdefault(customer['name'].lower(), {'name': customer['name'], 'code': customer['code']})
        return sorted(by_name.values(), key=lambda c: c['name'].lower())

    def find_customer(self, name):
        for customer in self.customers():
            if customer['name'].lower() == (name or '').strip().lower():
                return customer
        return None

    # Report recipients always live on the station
    def recipients(self):
        return self.local_store.load(EMAIL_RECIPIENTS_KEY)

    def set_recipients(self, recipients):
        return self.local_store.replace(EMAIL_RECIPIENTS_KEY, recipients)

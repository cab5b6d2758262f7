'''Serialization of evaluators, validators and voting systems to plain dicts.

These objects are configured only through their constructor parameters, so
each serializes to a dictionary naming its class under the ``class`` key and
listing those parameters; :func:`from_dict` rebuilds it. Only classes from
the ranktally package itself can be rebuilt, so definitions of voting
systems can be read from untrusted JSON.

Results are not rebuilt from dicts (they are recomputed from the ballots
instead); they serialize to the JSON-ready result shape through their own
``to_dict()`` methods, which :func:`serialize_value` also handles.
'''

import importlib
import inspect
from typing import Any, Dict, List

PACKAGE = __name__.split('.')[0]

ATOMIC_TYPES = (str, int, float, bool, type(None))


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The dictionary produced holds the attributes named like the class's
    constructor parameters (or the names listed in its ``serialize_params``
    attribute). The class must therefore keep its parameters as attributes
    in a form its constructor accepts.

    :param class_: The class to add the method to.
    '''
    if not hasattr(class_, 'serialize_params'):
        class_.serialize_params = _constructor_params(class_)
    param_names = class_.serialize_params

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': qualified_name(self)}
        out_dict.update(
            (param, serialize_value(getattr(self, param)))
            for param in param_names
        )
        return out_dict

    class_.to_dict = to_dict
    return class_


def _constructor_params(class_: type) -> List[str]:
    if class_.__init__ is object.__init__:
        return []
    return [
        name for name, param
        in inspect.signature(class_.__init__).parameters.items()
        if name != 'self' and param.kind not in (
            inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD
        )
    ]


def serialize_value(value: Any) -> Any:
    '''Convert a value to a JSON-ready form.

    Objects with a ``to_dict()`` method are serialized by it. Mapping keys
    are converted to strings, sets and tuples to lists.

    :raises ValueError: If the value has no JSON-ready form.
    '''
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, ATOMIC_TYPES):
        return value
    elif isinstance(value, dict):
        return {str(key): serialize_value(val) for key, val in value.items()}
    elif isinstance(value, (list, tuple, set, frozenset)):
        return [serialize_value(val) for val in value]
    raise ValueError(f'cannot serialize {value!r} to dict format')


def from_dict(value: Dict[str, Any]) -> Any:
    '''Rebuild an evaluator, validator or voting system from a dictionary.

    :param value: A dictionary created by :func:`to_dict`, possibly after
        a roundtrip through JSON.
    :raises ValueError: If the dictionary does not define a ranktally
        object.
    '''
    if not isinstance(value, dict):
        raise ValueError(f'invalid {PACKAGE} object def: dict expected, '
                         f'got {value!r}')
    elif 'class' not in value:
        raise ValueError(f'invalid {PACKAGE} object def: must have a class key')
    return _rebuild(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    '''Serialize an evaluator, voting system or result to a JSON-ready dict.

    :param obj: An object providing a ``to_dict()`` method.
    '''
    return serialize_value(obj)


def _rebuild(value: Any) -> Any:
    if isinstance(value, dict):
        params = {key: _rebuild(val) for key, val in value.items()}
        if 'class' in value:
            cls = load_class(params.pop('class'))
            return cls(**params)
        return params
    elif isinstance(value, list):
        return [_rebuild(val) for val in value]
    elif isinstance(value, ATOMIC_TYPES):
        return value
    raise ValueError(f'cannot deserialize {value!r}, type unknown')


def load_class(name: Any) -> type:
    '''Return the ranktally class with the given qualified name.

    :raises ValueError: If the name does not point to a class within
        ranktally.
    '''
    if not isinstance(name, str) or '.' not in name:
        raise ValueError(f'invalid {PACKAGE} class def: {name!r}')
    module_name, class_name = name.rsplit('.', 1)
    chunks = name.split('.')
    if chunks[0] != PACKAGE or not all(ch.isidentifier() for ch in chunks):
        raise ValueError(f'invalid {PACKAGE} class def: {name!r}')
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f'invalid {PACKAGE} class def: {name!r}') from e
    cls = getattr(module, class_name, None)
    if not inspect.isclass(cls):
        raise ValueError(f'invalid {PACKAGE} class def: {name!r}')
    return cls


def qualified_name(obj: Any) -> str:
    '''Return the module-qualified name of the object's class.'''
    cls = type(obj)
    return f'{cls.__module__}.{cls.__name__}'

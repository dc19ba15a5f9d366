"""Artifact emitters -- pure functions of a ``TopologyModel``.

Each generator first builds structured sections and then renders them
through a Jinja2 template from ``deltas_setup/emitters/templates/``.

Quick usage::

    from deltas_setup.emitters import ComposeGenerator, EnvGenerator, NginxGenerator

    compose_text = ComposeGenerator().emit(model)
    env_text = EnvGenerator().emit(model)
"""

from deltas_setup.emitters.compose_gen import ComposeGenerator, ComposeService, port_mapping
from deltas_setup.emitters.env_gen import EnvGenerator, EnvSection
from deltas_setup.emitters.nginx_gen import NginxDisabledError, NginxGenerator, NginxSections
from deltas_setup.emitters.templates import TemplateRenderer

__all__ = [
    "ComposeGenerator",
    "ComposeService",
    "EnvGenerator",
    "EnvSection",
    "NginxDisabledError",
    "NginxGenerator",
    "NginxSections",
    "TemplateRenderer",
    "port_mapping",
]

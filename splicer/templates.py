# splicer/templates.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Set

# {{name}} rather than $name or {name}: both collide with ordinary JavaScript.
_PLACEHOLDER_RE = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class TemplateError(ValueError):
    pass


@dataclass(frozen=True)
class Template:
    name: str
    body: str
    defaults: Mapping[str, str] = field(default_factory=dict)

    def placeholders(self) -> Set[str]:
        return set(_PLACEHOLDER_RE.findall(self.body))

    def render(self, params: Optional[Mapping[str, str]] = None) -> str:
        values: Dict[str, str] = {**self.defaults, **(params or {})}

        unknown = set(values) - self.placeholders()
        if unknown:
            raise TemplateError(f"Template {self.name!r}: unknown params {sorted(unknown)}")

        missing = self.placeholders() - set(values)
        if missing:
            raise TemplateError(f"Template {self.name!r}: missing params {sorted(missing)}")

        return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], self.body)


# ----------------------------
# Built-in templates
# ----------------------------

# The error tracker is one explicit state object with install()/uninstall()
# instead of loose window-level counters.
ERROR_TRACKER = Template(
    name="error_tracker",
    defaults={"namespace": "APP", "max_errors": "100"},
    body="""
<script>
'use strict';
window.{{namespace}} = window.{{namespace}} || {};
window.{{namespace}}.errors = (function () {
    const state = { count: 0, max: {{max_errors}}, fatal: false, installed: false, previous: null };

    function onError(msg, url, line, col, error) {
        state.count++;
        console.error('[Error #' + state.count + ']', { msg, url, line, col, error });
        if (state.count > state.max && !state.fatal) {
            state.fatal = true;
            console.error('[CRITICAL] Error count exceeded threshold');
        }
        return false;
    }

    function onRejection(event) {
        state.count++;
        console.error('[Unhandled Rejection]', event.reason);
    }

    return {
        install() {
            if (state.installed) return;
            state.previous = window.onerror;
            window.onerror = onError;
            window.addEventListener('unhandledrejection', onRejection);
            state.installed = true;
        },
        uninstall() {
            if (!state.installed) return;
            window.onerror = state.previous;
            window.removeEventListener('unhandledrejection', onRejection);
            state.installed = false;
        },
        reset() { state.count = 0; state.fatal = false; },
        get count() { return state.count; },
        get fatal() { return state.fatal; }
    };
})();
window.{{namespace}}.errors.install();
</script>
""",
)

BOOTSTRAP = Template(
    name="bootstrap",
    defaults={"entry_class": "App", "instance_global": "app"},
    body="""
<script>
window.addEventListener('load', () => {
    try {
        const instance = new {{entry_class}}();
        window.{{instance_global}} = instance;
        const p = instance.init();
        if (p && typeof p.catch === 'function') {
            p.catch((e) => { console.error('[Boot] Init failed:', e); });
        }
    } catch (e) {
        console.error('[Boot] Failed:', e);
    }
});
</script>
""",
)

TEARDOWN = Template(
    name="teardown",
    defaults={"namespace": "APP"},
    body="""
<script>
window.addEventListener('beforeunload', function () {
    const ns = window.{{namespace}};
    if (ns && ns.errors && typeof ns.errors.uninstall === 'function') {
        ns.errors.uninstall();
    }
});
</script>
""",
)

DOCUMENT_CLOSE = Template(name="document_close", body="\n</body>\n</html>\n")

BUILTIN_TEMPLATES: Dict[str, Template] = {
    t.name: t for t in (ERROR_TRACKER, BOOTSTRAP, TEARDOWN, DOCUMENT_CLOSE)
}


def render_template(name: str, params: Optional[Mapping[str, str]] = None) -> str:
    if name not in BUILTIN_TEMPLATES:
        raise TemplateError(f"Unknown template: {name!r} (known: {sorted(BUILTIN_TEMPLATES)})")
    return BUILTIN_TEMPLATES[name].render(params)

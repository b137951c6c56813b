import typing as T

from jcache import (
    settings,
    structures,
)

DEFAULTS: T.Dict[str, structures.Policy] = {
    "read-write": structures.Policy(read=True, write=True),
    "write-only": structures.Policy(read=False, write=True),
}


def cacheable(
    registration: structures.Registration,
    config: settings.Config,
) -> bool:
    if registration.cacheable is not None:
        return registration.cacheable
    if config.name_convention:
        return registration.name.lower().endswith("cache")
    return True


def environment(environ: T.Optional[T.Mapping[str, str]] = None) -> structures.Policy:
    return structures.Policy(
        read=settings.enabled(settings.READ_VARIABLE, environ),
        write=settings.enabled(settings.WRITE_VARIABLE, environ),
    )


def resolve(
    registration: structures.Registration,
    config: settings.Config,
    environ: T.Optional[T.Mapping[str, str]] = None,
) -> structures.Policy:
    """
    Layers, later wins: mode default, environment, per-registration
    override, write-only clamp, cacheable gate on read, production.
    """

    if config.production:
        return structures.Policy.off()

    policy = DEFAULTS[registration.mode]

    if config.environment:
        policy = environment(environ)

    policy = registration.override.apply(policy)

    if registration.mode == "write-only":
        policy = structures.Policy(read=False, write=policy.write)

    if not cacheable(registration, config):
        policy = structures.Policy(read=False, write=policy.write)

    return policy

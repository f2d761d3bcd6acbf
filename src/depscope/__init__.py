"""depscope: find out which components a type really depends on.

depscope takes a type in a modular application and discovers the other types it
references, then attributes each of them to the application module or third-party
library that defines it. Comparing those components with the package requirements a
module declares surfaces missing and unused requirements.

Signals:
    - constructor parameter types that cannot currently be resolved
    - implemented interfaces
    - import declarations in the defining file
    - pattern matches in the defining file (string class references, entry points,
      dynamic module imports)

Basic Usage:
    >>> from depscope.builders import make_inspector
    >>> from depscope.settings import Settings
    >>>
    >>> inspector = make_inspector(Settings(known_modules=["App_Checkout"]))
    >>> inspector.set_target("App.Checkout.Model.Cart")
    >>> inspector.get_dependencies()
    >>> inspector.get_component_by_class()

The package consists of several modules:
    - inspector: the dependency inspector combining the signals
    - oracle: type existence checks with the factory-suffix fallback
    - introspection: runtime introspection of Python types and substitutions
    - imports: lexical import scanning
    - detectors: pattern detectors over raw source text
    - components, packages: component attribution, package versions and manifests
    - scan: requirement cross-checking
    - builders, settings, cli: wiring, configuration and the command line
"""

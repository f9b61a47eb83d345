# imgeraser

Data model and configuration handling for a controller that removes unused
container images from the nodes of a cluster.

## Modules

- `imgeraser.types` – the `ImageJob`, `ImageJobList`, `ImageList` and
  `ImageListList` resources, with `ObjectMeta`, `ListMeta`, `ImageJobStatus`,
  `ImageListSpec`, `ImageListStatus`, `Image` and the `JobPhase` enum
  (`Running`, `Completed`, `Failed`). Each resource converts to and from a
  plain dictionary with `to_dict()` / `from_dict(data)`; timestamps are
  timezone-aware UTC `datetime` values. `add_to_scheme(scheme)` registers the
  four kinds under both `eraser.sh/v1` and `eraser.sh/v1alpha1`.
- `imgeraser.eraserconfig` – the `EraserConfig` resource: `ManagerConfig`
  (runtime, OTLP endpoint, log level, scheduling, profiling, image-job
  success ratio and cleanup delays, pull secrets, node filter, priority
  class) and `Components` (collector, scanner and eraser containers). Load it
  with `EraserConfig.from_json(text)` or `EraserConfig.from_dict(data)`, write
  it with `to_dict()`, which leaves out empty values. Top-level keys other
  than `apiVersion`, `kind`, `manager` and `components` are kept unchanged in
  `controller_manager`. `parse_runtime(value)` accepts `containerd`,
  `dockershim` or `crio`. `add_to_scheme(scheme)` registers `EraserConfig`
  under `eraser.sh/v1alpha1`.
- `imgeraser.manager` – `ConfigManager`, a thread-safe holder of the current
  configuration: `read()` returns a copy, `update(new_config)` replaces the
  held contents. `default_config(build_version, default_repo="")` builds the
  stock configuration (containerd runtime, 24h repeat interval, a one-day
  delay before failed jobs are removed, exclusion by the
  `eraser.sh/cleanup.filter` selector, and the collector, scanner and eraser
  images tagged `build_version`, prefixed by `default_repo` when given).
  `DEFAULT_SCANNER_CONFIG` holds the scanner's default settings text.
- `imgeraser.scheme` – `GroupVersion` (with `GroupVersion.parse`), the
  constants `V1` and `V1ALPHA1`, and `Scheme`, a registry that maps an
  `apiVersion`/`kind` pair to a class (`register`, `lookup`) and builds
  objects from JSON text or mappings with `decode(data)`.
- `imgeraser.duration` – `parse_duration(text)` turns strings such as `"24h"`
  or `"1m30s"` into integer nanoseconds; `format_duration(ns)` goes back.
  Durations in the configuration are held as nanoseconds.
- `imgeraser.quantity` – `parse_quantity(text)` reads resource amounts such as
  `"25Mi"`, `"1500m"` or `"1e3"` into an exact `Quantity`, which compares by
  amount and prints in its original notation.

## Installation

```
pip install .
```

## Example

```python
from imgeraser import eraserconfig, types
from imgeraser.manager import ConfigManager, default_config
from imgeraser.scheme import Scheme

scheme = Scheme()
types.add_to_scheme(scheme)
eraserconfig.add_to_scheme(scheme)

image_list = scheme.decode({
    "apiVersion": "eraser.sh/v1",
    "kind": "ImageList",
    "metadata": {"name": "imagelist"},
    "spec": {"images": ["docker.io/library/alpine:3.7.3"]},
})
print(image_list.spec.images)

manager = ConfigManager(default_config("v1.1.0-beta.0", "ghcr.io/example"))
config = manager.read()
print(config.components.eraser.image.repo)  # ghcr.io/example/eraser
```

## Errors

Errors are raised as exceptions: `SchemeError` (a `ValueError`) for unknown
or conflicting kinds and malformed documents, `ConfigError` when a
`ConfigManager` holds no configuration or is given none, and `ValueError`
for bad durations, quantities, runtime names or a mismatched `kind`.

## What this package does not do

It only models and validates the resources and configuration. It does not
talk to a cluster, watch or reconcile resources, schedule image jobs, scan
or remove images, or export metrics, and it provides no command-line
program.

## Running the tests

```
pip install .[test]
pytest
```
# sysbro

Helpers for looking after a Linux desktop: reading system information from
`/proc` and `/sys`, managing XDG autostart entries, listing and toggling
systemd services, and launching companion tools.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Managing startup applications

The `sysbro-startup-apps` command manages the `.desktop` files in your
autostart directory (`$XDG_CONFIG_HOME/autostart`, by default
`~/.config/autostart`):

```
sysbro-startup-apps list                      # the default when no command is given
sysbro-startup-apps add NAME EXEC             # writes NAME.desktop, prints its path
sysbro-startup-apps edit PATH [--name N] [--icon I] [--exec E]
sysbro-startup-apps remove PATH
sysbro-startup-apps clear                     # deletes every entry
sysbro-startup-apps import FILE.desktop ...   # copies files, never overwrites
```

`--dir` chooses another autostart directory and `--locale` the locale used to
pick localized `Name[...]` values. Paths given to `edit` and `remove` may be
relative to the autostart directory. When there are no entries, `list` prints
"No boot application found".

The same operations are available from Python:

```python
from sysbro.autostart import AutoStartManager

manager = AutoStartManager()
manager.add_new_app("Notes", "notes-app")
for app in manager.apps:
    print(app.name, app.exec, app.file_path)
```

`AutoStartManager` also offers `set_value`, `edit_app`, `remove_app`,
`delete_all_apps`, `import_files`, and `subscribe` for a callback run after
every reload. Desktop entry files can be read and written directly with
`sysbro.desktop_properties.DesktopProperties`, which keeps `;` in values
intact and writes keys in sorted order.

## System information

```python
from sysbro import utils

print(utils.platform_name(), utils.kernel_version())
model, cores = utils.cpu_info()
print(utils.memory_info().text, utils.disk_info().percent)
print(utils.format_bytes(123456789, space=True))   # "117.7 MB"
```

Every reader that uses a file under `/proc` or `/sys` has a `parse_*`
counterpart that takes the file's text (`parse_cpu_info`, `parse_cpu_time`,
`parse_memory_info`, `parse_network_bandwidth`, `parse_cpu_temperature`,
`parse_boot_time`), so the parsing can be used on captured data. There are
also helpers for file sizes, cache and log listings, running a command through
`pkexec` (`sudo_exec`) and listing process ids (`task_pids`).

## Services and tools

`sysbro.services.ServiceModel` lists enabled and disabled systemd service unit
files with their descriptions (Chinese descriptions for known units under the
`zh_CN` locale) and switches them with
`pkexec sysbro-service-mgr enable|disable NAME`. A custom command runner can
be passed in for testing.

`sysbro.tools.available_tools()` lists the companion tools and
`launch_tool(key)` starts one detached from the current process.

## Gauges

`sysbro.gauges` holds the geometry behind the loading spinner
(`LoadingSpinner`, with `layout` and `frame`) and the circular percentage
gauge (`ProgressGauge`, with `arc_length` and `percent_text`), independent of
any GUI toolkit.

## What this package does not do

There is no graphical interface: no windows, tray icon or drawing, only the
command line and the Python API. Hardware sensors are not read beyond the
first thermal zone. The companion tools that `launch_tool` starts, and the
`sysbro-service-mgr` helper used to switch services, are not part of this
package and must be installed separately.
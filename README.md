# kcoretouch

This package provides building blocks for a camera-based multitouch surface. It has three parts:

- **Calibration.** It maps camera pixels to normalised screen coordinates.
- **TUIO encoding.** It encodes tracked blobs as TUIO `/tuio/2Dcur` data.
- **GUI controls.** A small set of controls with no renderer. They keep their own state and save it to XML.

It uses only the standard library.

## Installation

```
pip install .
```

## Modules

| Module | Contents |
| --- | --- |
| `kcoretouch.geometry` | `Vector2D`, `Rect2D`, `Blob`, `is_point_in_triangle` |
| `kcoretouch.calibration_utils` | `CalibrationUtils`: the triangulated calibration mesh and its XML file |
| `kcoretouch.calibration` | `Calibration`, `Key`, `circle_loader_triangles`: the interactive calibration workflow |
| `kcoretouch.box_align` | `BoxAligner`: four draggable corner handles of a projection area |
| `kcoretouch.tuio` | OSC, Flash-XML and binary encoders, and `TuioSender` |
| `kcoretouch.gui_globals` | `RGBA`, `XmlSettings`, `GuiGlobals`: shared style, listener and XML store |
| `kcoretouch.gui_object` | `GuiObject` base class, plus the `Display`, `Task` and `ObjectType` enums |
| `kcoretouch.gui_button`, `gui_color`, `gui_files`, `gui_knob`, `gui_matrix` | The controls |
| `kcoretouch.gui` | `Gui`: a collection of controls, with event dispatch and persistence |

## Calibration mesh

`CalibrationUtils` holds a grid of camera points and a grid of matching screen points. The grid is split into triangles. A camera coordinate is mapped to screen space by barycentric interpolation inside the triangle that contains it. A point outside the mesh maps to `(0.0, 0.0)`.

```python
from kcoretouch.calibration_utils import CalibrationUtils

utils = CalibrationUtils("calibration.xml")
utils.set_cam_res(320, 240)
utils.load_settings()          # grid, bounding box and stored camera points

screen_x, screen_y = utils.camera_to_screen_space(160.0, 120.0)
width, height = utils.transform_dimension(20.0, 20.0)
```

When the file is missing, `load_settings()` falls back to these defaults:

- a 50 × 50 grid;
- a bounding box from `(0, 0)` to `(1, 1)`.

It also sets `utils.message` to say which case applied.

To resize the mesh, call `set_grid(x, y)`; each axis must be at least 1.
The screen area is set with either of these:

- `set_screen_bbox(Rect2D(...))`
- `set_screen_scale(s)`

`compute_camera_to_screen_map()` returns one screen point per camera pixel, row by row.

A calibration run works as follows:

1. Call `begin_calibration()`.
2. Store a camera point in `camera_points[calibration_step]`, then call `next_calibration_step()`. Repeat this for each grid point.
3. After the last point, the box is recomputed and the file is written with `save_calibration()`.

`revert_calibration_step()` steps back and does not go below 0.

## Interactive calibration

`Calibration` drives a `CalibrationUtils` from key presses and touches. You can pass a tracker to it. Any object with a `pass_in_calibration(utils)` method will do. The mesh is handed to the tracker whenever it changes.

Keys are handled only while `calibration.calibrating` is true. Character keys are passed as strings and arrow keys as `Key` members.

| Key | Action |
| --- | --- |
| `"c"` | Start or stop calibrating |
| `"r"` | Go back one step |
| `"t"` | Toggle blob targets |
| `Key.LEFT` / `Key.RIGHT` / `Key.UP` / `Key.DOWN` | Nudge the bounding box by 0.001 |
| `"w"`, `"a"`, `"s"`, `"d"` held together with an arrow key | Move only that side of the box |
| `"="` / `"-"` | Add or remove a column of points |
| `"+"` / `"_"` | Add or remove a row of points |

Columns and rows are kept between 1 and 16. Releasing an arrow key recomputes the camera-to-screen map.

Touches advance the calibration:

- `touch_held(blob)` records the blob's centroid as the current camera point.
- `touch_up(blob)` moves to the next step.

Two helpers support drawing:

- `instructions()` returns the help text.
- `loader_angle(blobs)` returns the largest `sitting` fraction among the blobs.

`circle_loader_triangles(...)` returns the triangle fan of a progress arc, for whatever renderer you use.

## TUIO output

The encoders are plain functions:

- `encode_osc_message` and `encode_osc_bundle` encode generic OSC.
- `build_osc_bundle` returns one TUIO bundle: a `set` message per blob, then `alive`, then `fseq`.
- `build_flash_packet` returns the XML packet for Flash clients.
- `build_binary_packet` returns `CCV\0`, then a little-endian count, then the fields of each blob.

All of them skip blobs whose centroid is `(0, 0)`.

`TuioSender` counts frames and passes encoded packets to callables you supply. Pass `None` for a transport you do not use.

```python
import time
from kcoretouch.geometry import Blob, Vector2D
from kcoretouch.tuio import TuioSender

sent = []
sender = TuioSender(osc_send=sent.append, tcp_send=None, raw_send=None, clock=time.monotonic)
sender.set_mode(True, False, False)
sender.send_tuio({1: Blob(id=1, centroid=Vector2D(0.5, 0.5))}, {}, {})
```

Transports are switched on through these attributes:

| Attribute | Default |
| --- | --- |
| `osc_mode` | on |
| `tcp_mode` | off |
| `binary_mode` | off |

Setting `height_width` adds each blob's width and height to the packets. `set_mode` always keeps plain blobs enabled. Binary packets are sent for blobs and fingers only, not for objects.

## GUI controls

The controls are `GuiButton`, `GuiColor`, `GuiFiles`, `GuiKnob` and `GuiMatrix`.

Each one:

- takes a `GuiGlobals`;
- is configured with `init(...)`;
- reacts to `mouse_pressed`, `mouse_dragged` and `mouse_released`;
- reports changes to `globals.listener(param_id, task, value)`.

`Gui` collects controls with `add()`. It forwards mouse events while it is active, and passes `update()` calls on while it is active or forced. It persists everything with `save_to_xml(path)` and `load_state(path)`. Loading restores the flags and the style, then lets each registered control with a matching id and type announce its value.

```python
from kcoretouch.gui import Gui
from kcoretouch.gui_button import GuiButton
from kcoretouch.gui_globals import GuiGlobals
from kcoretouch.gui_object import Display

globals_ = GuiGlobals(listener=lambda pid, task, value: print(pid, task, value))
gui = Gui(globals_)
button = gui.add(GuiButton(globals_))
button.init(1, "Enable", 10, 10, 12, 12, False, Display.BUTTON_SWITCH)
gui.activate(True)
gui.mouse_pressed(15, 15, 0)
gui.save_to_xml("gui.xml")
```

`XmlSettings` is the store that the controls use. Its tags are addressed by `A:B:C` paths, relative to a stack of pushed tags.

Text widths are estimated from the heading font size. To use real measurements, set `globals_.measure` to a function that measures them.

## What the package does not do

- It does not draw anything. There is no window, no drawing code and no font loading; the package only keeps state and geometry for a renderer to use.
- It does not capture camera images or track blobs. `Blob` values and the tracker given to `Calibration` come from your own code.
- It opens no sockets. `TuioSender` only hands packets to the callables you give it.
- There is no command-line program.

## Tests

```
pip install .[test]
pytest
```
"""Camera-to-screen calibration mesh and its XML persistence."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from os import PathLike
from pathlib import Path

from .geometry import Rect2D, Vector2D, is_point_in_triangle

logger = logging.getLogger(__name__)

DEFAULT_GRID = 50
LOADED_MESSAGE = "Calibration Loaded!"
NOT_FOUND_MESSAGE = "No calibration Found..."


def _number(element: ET.Element, path: str, default: float) -> float:
    node = element.find(path)
    if node is None or node.text is None:
        return default
    try:
        return float(node.text.strip())
    except ValueError:
        return default


def _add_text(parent: ET.Element, tag: str, value: object) -> None:
    ET.SubElement(parent, tag).text = str(value)


class CalibrationUtils:
    """A triangulated grid mapping camera coordinates onto screen coordinates."""

    def __init__(self, path: str | PathLike[str] = "calibration.xml") -> None:
        self.path = Path(path)
        self.cam_width = 320
        self.cam_height = 240
        self.screen_bb = Rect2D()
        self.calibrating = False
        self.go_to_next_step = False
        self.calibration_step = 0
        self.message = ""
        self.camera_to_screen_map: list[Vector2D] = []
        self.max_box_x = 0.0
        self.min_box_x = 0.0
        self.max_box_y = 0.0
        self.min_box_y = 0.0
        self.set_grid(DEFAULT_GRID, DEFAULT_GRID)
        self.calculate_box()

    # ------------------------------------------------------------------
    # persistence

    def _read_screen(self) -> tuple[bool, ET.Element | None]:
        try:
            root = ET.parse(self.path).getroot()
        except (OSError, ET.ParseError):
            return False, None
        if root.tag == "SCREEN":
            return True, root
        return True, root.find("SCREEN")

    def load_settings(self) -> None:
        """Load grid, bounding box and camera points from the calibration file."""
        self.go_to_next_step = False
        loaded, screen = self._read_screen()
        self.message = LOADED_MESSAGE if loaded else NOT_FOUND_MESSAGE
        if screen is None:
            screen = ET.Element("SCREEN")

        self.calibrating = False
        self.calibration_step = 0

        grid_x = int(_number(screen, "GRIDMESH/GRIDX", DEFAULT_GRID))
        grid_y = int(_number(screen, "GRIDMESH/GRIDY", DEFAULT_GRID))
        self.set_grid(grid_x, grid_y)

        upper_left = Vector2D(
            _number(screen, "BOUNDINGBOX/ulx", 0.0), _number(screen, "BOUNDINGBOX/uly", 0.0)
        )
        lower_right = Vector2D(
            _number(screen, "BOUNDINGBOX/lrx", 1.0), _number(screen, "BOUNDINGBOX/lry", 1.0)
        )
        self.set_screen_bbox(Rect2D(upper_left, lower_right))

        groups = screen.findall("POINT")
        if groups:
            points = groups[-1].findall("POINT")[: self.grid_points]
            for index, point in enumerate(points):
                # Stored points are read back as whole camera pixels.
                x = int(_number(point, "X", 0.0))
                y = int(_number(point, "Y", 0.0))
                self.camera_points[index] = Vector2D(x, y)
                logger.debug("Calibration: %f, %f", x, y)

        self.calculate_box()

    def save_calibration(self) -> None:
        """Write grid, bounding box and camera points to the calibration file."""
        screen = ET.Element("SCREEN")
        mesh = ET.SubElement(screen, "GRIDMESH")
        _add_text(mesh, "GRIDX", self.grid_x)
        _add_text(mesh, "GRIDY", self.grid_y)

        box = ET.SubElement(screen, "BOUNDINGBOX")
        _add_text(box, "ulx", self.screen_bb.upper_left.x)
        _add_text(box, "uly", self.screen_bb.upper_left.y)
        _add_text(box, "lrx", self.screen_bb.lower_right.x)
        _add_text(box, "lry", self.screen_bb.lower_right.y)

        group = ET.SubElement(screen, "POINT")
        for point in self.camera_points:
            element = ET.SubElement(group, "POINT")
            _add_text(element, "X", point.x)
            _add_text(element, "Y", point.y)

        tree = ET.ElementTree(screen)
        ET.indent(tree)
        tree.write(self.path, encoding="utf-8", xml_declaration=True)

    # ------------------------------------------------------------------
    # grid set-up

    def set_screen_scale(self, s: float) -> None:
        offset = (1.0 - s) * 0.5
        self.screen_bb = Rect2D(Vector2D(offset, offset), Vector2D(1.0 - offset, 1.0 - offset))
        self.init_screen_points()

    @property
    def screen_scale(self) -> float:
        """The largest centred scale that fits inside the bounding box."""
        bb = self.screen_bb
        min_lower = 1.0 - min(bb.lower_right.x, bb.lower_right.y)
        max_upper = max(bb.upper_left.x, bb.upper_left.y)
        return 1.0 - 2.0 * min(min_lower, max_upper)

    def set_screen_bbox(self, box: Rect2D) -> None:
        self.screen_bb = box
        self.init_screen_points()

    def set_grid(self, x: int, y: int) -> None:
        """Resize the mesh to x by y cells and reset its points."""
        if x < 1 or y < 1:
            raise ValueError(f"grid must have at least one cell per axis, got {x}x{y}")
        self.grid_x = x
        self.grid_y = y
        self.grid_points = (x + 1) * (y + 1)
        self.grid_indices = x * y * 6
        self.screen_points = [Vector2D()] * self.grid_points
        self.camera_points = [Vector2D()] * self.grid_points
        self.init_triangles()
        self.init_screen_points()
        self.init_camera_points(self.cam_width, self.cam_height)

    def set_cam_res(self, cam_width: int = 320, cam_height: int = 240) -> None:
        self.cam_width = cam_width
        self.cam_height = cam_height

    def init_triangles(self) -> None:
        row = self.grid_x + 1
        triangles: list[int] = []
        for j in range(self.grid_y):
            for i in range(self.grid_x):
                corner = i + j * row
                triangles += [corner, corner + 1, corner + row]
                triangles += [corner + 1, corner + 1 + row, corner + row]
        self.triangles = triangles

    def init_screen_points(self) -> None:
        upper_left = self.screen_bb.upper_left
        xd = Vector2D(self.screen_bb.width, 0.0) / self.grid_x
        yd = Vector2D(0.0, self.screen_bb.height) / self.grid_y
        self.screen_points = [
            upper_left + xd * i + yd * j
            for j in range(self.grid_y + 1)
            for i in range(self.grid_x + 1)
        ]

    def init_camera_points(self, cam_width: int, cam_height: int) -> None:
        self.camera_points = [
            Vector2D(i * cam_width / self.grid_x, j * cam_height / self.grid_y)
            for j in range(self.grid_y + 1)
            for i in range(self.grid_x + 1)
        ]

    # ------------------------------------------------------------------
    # transformations

    def compute_camera_to_screen_map(self) -> list[Vector2D]:
        """Map every camera pixel to screen space, row by row."""
        self.camera_to_screen_map = [
            Vector2D(*self.camera_to_screen_space(float(x), float(y)))
            for y in range(self.cam_height)
            for x in range(self.cam_width)
        ]
        return self.camera_to_screen_map

    def camera_to_screen_position(self, x: float, y: float) -> tuple[float, float]:
        return self.camera_to_screen_space(x, y)

    def camera_to_screen_space(self, x: float, y: float) -> tuple[float, float]:
        """Transform a camera coordinate into screen space; (0, 0) outside the mesh."""
        pt = Vector2D(x, y)
        t = self.find_triangle_within(pt)
        if t is None:
            return 0.0, 0.0
        ia, ib, ic = self.triangles[t : t + 3]
        a, b, c = self.camera_points[ia], self.camera_points[ib], self.camera_points[ic]
        total_area = (a.x - b.x) * (a.y - c.y) - (a.y - b.y) * (a.x - c.x)
        if total_area == 0:
            return 0.0, 0.0
        area_a = (pt.x - b.x) * (pt.y - c.y) - (pt.y - b.y) * (pt.x - c.x)
        area_b = (a.x - pt.x) * (a.y - c.y) - (a.y - pt.y) * (a.x - c.x)
        bary_a = area_a / total_area
        bary_b = area_b / total_area
        bary_c = 1.0 - bary_a - bary_b
        result = (
            self.screen_points[ia] * bary_a
            + self.screen_points[ib] * bary_b
            + self.screen_points[ic] * bary_c
        )
        return result.x, result.y

    def transform_dimension(self, width: float, height: float) -> tuple[float, float]:
        """Transform a size as if it were centred in the calibrated region."""
        half_x = width * 0.5
        half_y = height * 0.5
        center_x = (self.max_box_x - self.min_box_x) / 2 + self.min_box_x
        center_y = (self.max_box_y - self.min_box_y) / 2 + self.min_box_y
        ul_x, ul_y = self.camera_to_screen_position(center_x - half_x, center_y - half_y)
        lr_x, lr_y = self.camera_to_screen_position(center_x + half_x, center_y + half_y)
        return abs(lr_x - ul_x), abs(ul_y - lr_y)

    def calculate_box(self) -> None:
        """Compute the min/max extent of the camera points."""
        self.max_box_x = 0.0
        self.min_box_x = float(self.cam_width)
        self.max_box_y = 0.0
        self.min_box_y = float(self.cam_height)
        for point in self.camera_points:
            if point.x > self.max_box_x:
                self.max_box_x = point.x
            elif point.x < self.min_box_x:
                self.min_box_x = point.x
            if point.y > self.max_box_y:
                self.max_box_y = point.y
            elif point.y < self.min_box_y:
                self.min_box_y = point.y

    def find_triangle_within(self, pt: Vector2D) -> int | None:
        """Index of the first triangle holding pt, or None if there is none."""
        cams = self.camera_points
        tris = self.triangles
        for t in range(0, len(tris), 3):
            if is_point_in_triangle(pt, cams[tris[t]], cams[tris[t + 1]], cams[tris[t + 2]]):
                return t
        return None

    # ------------------------------------------------------------------
    # calibration steps

    def begin_calibration(self) -> None:
        self.calibrating = True
        self.calibration_step = 0

    def next_calibration_step(self) -> None:
        if not self.calibrating:
            return
        self.calibration_step += 1
        if self.calibration_step >= self.grid_points:
            self.calibrating = False
            self.calibration_step = 0
            self.calculate_box()
            self.save_calibration()

    def revert_calibration_step(self) -> None:
        if self.calibrating:
            self.calibration_step = max(self.calibration_step - 1, 0)
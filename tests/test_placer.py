"""Tests for the module placer.

Covers the geometry helpers, the structure state, and the placement
engine's three passes (direct, bridged, fallback), then lays out the
hull-factory fixture end to end.

Validates:
  - Touching boxes are not overlaps; buffers are not part of the box
  - The first module attaches to the root at the documented offset
  - No two attached modules ever overlap
  - Open nodes grow by (new connections - consumed), consumed is 0 or 1
  - Identical request sequences give identical layouts
  - Every request produces at least one placement
"""

from __future__ import annotations

import unittest

from stationgen.catalog import ModuleInfo, build_catalog, load_catalog
from stationgen.geometry import Vec3, Orientation
from stationgen.pipeline.config import LAYOUT_RULES
from stationgen.pipeline.design import ModuleRequest, StationDesign
from stationgen.pipeline.placer import (
    OpenNode, Placement, StructureState, PlacementEngine,
    overlaps, box_bounds, box_extents, extents_overlap, attach_center, chained_center,
    footprint_bounds, footprint_area,
    layout_station, grid_positions, layout_to_dict, parse_layout,
    ROOT, ATTACHED, CONNECTOR, FALLBACK, GRID,
)
from tests.station_fixture import make_factory_design, STORAGE_CUBE, CONNECTOR as CONNECTOR_KEY


def _assert_no_overlaps(test: unittest.TestCase, modules) -> None:
    solid = [m for m in modules if m.kind != FALLBACK]
    for i in range(len(solid)):
        for j in range(i + 1, len(solid)):
            a, b = solid[i], solid[j]
            test.assertFalse(
                overlaps(a.position, a.info, b.position, b.info),
                f"{a.key} at {a.position.as_tuple()} overlaps "
                f"{b.key} at {b.position.as_tuple()}",
            )


class TestPlacerGeometryHelpers(unittest.TestCase):
    """Unit tests for low-level geometry functions."""

    def test_identical_boxes_overlap(self):
        info = ModuleInfo.box(200, 200, 200)
        self.assertTrue(overlaps(Vec3(), info, Vec3(), info))

    def test_touching_faces_do_not_overlap(self):
        # [-100, 100] against [100, 1100] on X
        small = ModuleInfo.box(200, 200, 200)
        big = ModuleInfo.box(1000, 1000, 1000)
        self.assertFalse(overlaps(Vec3(0, 0, 0), small, Vec3(600, 0, 0), big))
        self.assertFalse(overlaps(Vec3(600, 0, 0), big, Vec3(0, 0, 0), small))

    def test_one_unit_of_intrusion_overlaps(self):
        small = ModuleInfo.box(200, 200, 200)
        big = ModuleInfo.box(1000, 1000, 1000)
        self.assertTrue(overlaps(Vec3(0, 0, 0), small, Vec3(599, 0, 0), big))

    def test_separated_on_one_axis_is_enough(self):
        info = ModuleInfo.box(400, 400, 400)
        # Overlap on X and Y, clear on Z
        self.assertFalse(overlaps(Vec3(0, 0, 0), info, Vec3(100, 100, 401), info))

    def test_buffer_not_part_of_box(self):
        padded = ModuleInfo.box(200, 200, 200, buffer=500)
        self.assertFalse(overlaps(Vec3(0, 0, 0), padded, Vec3(200, 0, 0), padded))

    def test_odd_sizes_truncate(self):
        info = ModuleInfo.box(201, 9, 3)
        lo, hi = box_bounds(Vec3(0, 0, 0), info)
        self.assertEqual(lo, Vec3(-100, -4, -1))
        self.assertEqual(hi, Vec3(100, 4, 1))

    def test_box_extents_match_box_bounds(self):
        info = ModuleInfo.box(201, 9, 3)
        lo, hi = box_bounds(Vec3(10, 20, 30), info)
        self.assertEqual(box_extents(Vec3(10, 20, 30), info), (lo.as_tuple(), hi.as_tuple()))

    def test_extents_overlap_is_strict(self):
        a = box_extents(Vec3(0, 0, 0), ModuleInfo.box(200, 200, 200))
        self.assertFalse(extents_overlap(a, box_extents(Vec3(200, 0, 0), ModuleInfo.box(200, 200, 200))))
        self.assertTrue(extents_overlap(a, box_extents(Vec3(199, 0, 0), ModuleInfo.box(200, 200, 200))))

    def test_attach_center_positive_axis(self):
        node = OpenNode(Vec3(100, 0, 0), Vec3(1, 0, 0))
        info = ModuleInfo.box(800, 800, 800)
        self.assertEqual(attach_center(node, info, info.buffer), Vec3(550, 0, 0))

    def test_attach_center_negative_axis(self):
        node = OpenNode(Vec3(0, -100, 0), Vec3(0, -1, 0))
        info = ModuleInfo.box(600, 400, 600)
        self.assertEqual(attach_center(node, info, 50), Vec3(0, -350, 0))

    def test_attach_center_keeps_off_axis_coordinates(self):
        node = OpenNode(Vec3(10, 20, 30), Vec3(0, 0, 1))
        info = ModuleInfo.box(100, 100, 600, buffer=0)
        self.assertEqual(attach_center(node, info, 0), Vec3(10, 20, 330))

    def test_chained_center(self):
        conn = ModuleInfo.box(200, 200, 200)
        target = ModuleInfo.box(800, 800, 800)
        center = chained_center(Vec3(250, 0, 0), Vec3(1, 0, 0), conn, target, 100)
        self.assertEqual(center, Vec3(850, 0, 0))
        center = chained_center(Vec3(0, 0, -250), Vec3(0, 0, -1), conn, target, 100)
        self.assertEqual(center, Vec3(0, 0, -850))

    def test_footprint(self):
        state = StructureState(load_catalog())
        state.add_module(STORAGE_CUBE, Vec3(550, 0, 0))
        self.assertEqual(footprint_bounds(state.modules), (-100.0, -400.0, 950.0, 400.0))
        self.assertAlmostEqual(footprint_area(state.modules), 200 * 200 + 800 * 800)

    def test_footprint_empty(self):
        self.assertEqual(footprint_bounds([]), (0.0, 0.0, 0.0, 0.0))


class TestStructureState(unittest.TestCase):
    """The growing set of placed modules and open nodes."""

    def setUp(self):
        self.catalog = load_catalog()
        self.state = StructureState(self.catalog)

    def test_bootstraps_root_connector(self):
        self.assertEqual(self.state.module_count, 1)
        root = self.state.root
        self.assertEqual(root.key, LAYOUT_RULES.connector_key)
        self.assertEqual(root.position, Vec3.ZERO)
        self.assertEqual(root.kind, ROOT)
        self.assertEqual(root.orientation, Orientation.CANONICAL)
        self.assertEqual(root.info.size, Vec3(200, 200, 200))

    def test_root_open_nodes(self):
        nodes = self.state.open_nodes
        self.assertEqual(
            [(n.position.as_tuple(), n.direction.as_tuple()) for n in nodes],
            [
                ((100, 0, 0), (1, 0, 0)),
                ((-100, 0, 0), (-1, 0, 0)),
                ((0, 100, 0), (0, 1, 0)),
                ((0, -100, 0), (0, -1, 0)),
                ((0, 0, 100), (0, 0, 1)),
                ((0, 0, -100), (0, 0, -1)),
            ],
        )

    def test_add_module_registers_nodes(self):
        m = self.state.add_module(STORAGE_CUBE, Vec3(550, 0, 0))
        self.assertEqual(m.info.size, Vec3(800, 800, 800))
        self.assertEqual(len(self.state.open_nodes), 12)
        self.assertIn(OpenNode(Vec3(950, 0, 0), Vec3(1, 0, 0)), self.state.open_nodes)

    def test_add_module_without_nodes(self):
        self.state.add_module(STORAGE_CUBE, Vec3(550, 0, 0), open_nodes=False)
        self.assertEqual(self.state.module_count, 2)
        self.assertEqual(len(self.state.open_nodes), 6)

    def test_consume_removes_one_node(self):
        node = self.state.open_nodes[2]
        self.state.consume(node)
        self.assertEqual(len(self.state.open_nodes), 5)
        self.assertNotIn(node, self.state.open_nodes)

    def test_ranked_nodes_stable_on_ties(self):
        # All six root nodes are 100 from the origin
        self.assertEqual(self.state.ranked_nodes(), list(self.state.open_nodes))

    def test_ranked_nodes_nearest_first(self):
        self.state.add_module(STORAGE_CUBE, Vec3(0, 0, -2000), open_nodes=True)
        ranked = self.state.ranked_nodes()
        dists = [n.position.manhattan() for n in ranked]
        self.assertEqual(dists, sorted(dists))
        self.assertEqual(ranked[0], self.state.open_nodes[0])

    def test_collides(self):
        cube = self.catalog.lookup(STORAGE_CUBE)
        self.assertTrue(self.state.collides(Vec3(0, 0, 0), cube))
        self.assertFalse(self.state.collides(Vec3(500, 0, 0), cube))   # touching
        self.assertTrue(self.state.collides(Vec3(499, 0, 0), cube))

    def test_views_are_snapshots(self):
        modules = self.state.modules
        self.state.add_module(STORAGE_CUBE, Vec3(550, 0, 0))
        self.assertEqual(len(modules), 1)
        self.assertEqual(self.state.module_count, 2)


class TestPlacementEngine(unittest.TestCase):
    """The three placement passes on the default catalog."""

    def setUp(self):
        self.catalog = load_catalog()
        self.engine = PlacementEngine(self.catalog)

    def test_first_module_attaches_to_root(self):
        result = self.engine.place(STORAGE_CUBE)
        self.assertEqual(len(result), 1)
        p = result[0]
        self.assertEqual(p.key, STORAGE_CUBE)
        self.assertEqual(p.kind, ATTACHED)
        self.assertEqual(p.orientation, Orientation.CANONICAL)
        # +X is the first root node; 200/2 + 800/2 + buffer 50
        self.assertEqual(p.position, Vec3(200 // 2 + 800 // 2 + 50, 0, 0))

    def test_ties_go_to_earliest_node(self):
        self.engine.place(STORAGE_CUBE)
        second = self.engine.place(STORAGE_CUBE)
        self.assertEqual(second[0].position, Vec3(-550, 0, 0))
        third = self.engine.place(STORAGE_CUBE)
        self.assertEqual(third[0].position, Vec3(1400, 0, 0))

    def test_direct_placement_consumes_one_node(self):
        before = len(self.engine.state.open_nodes)
        self.engine.place(STORAGE_CUBE)
        self.assertEqual(len(self.engine.state.open_nodes), before + 6 - 1)

    def test_ten_cubes_never_overlap(self):
        placements = []
        for _ in range(10):
            placements.extend(self.engine.place(STORAGE_CUBE))
        cubes = [p for p in placements if p.key == STORAGE_CUBE]
        self.assertEqual(len(cubes), 10)
        self.assertTrue(all(p.kind != FALLBACK for p in placements))
        _assert_no_overlaps(self, self.engine.state.modules)

    def test_open_node_growth(self):
        for key in [STORAGE_CUBE, "prod_gen_energycells_macro", "prod_gen_hullparts_macro"] * 4:
            before = len(self.engine.state.open_nodes)
            result = self.engine.place(key)
            added = sum(len(self.catalog.lookup(p.key).connections) for p in result)
            consumed = before + added - len(self.engine.state.open_nodes)
            self.assertIn(consumed, (0, 1))

    def test_deterministic(self):
        keys = [STORAGE_CUBE, "prod_gen_hullparts_macro", "pier_arg_harbor_03_macro",
                "prod_gen_energycells_macro", "unknown_macro"] * 3
        a = PlacementEngine(self.catalog)
        b = PlacementEngine(self.catalog)
        self.assertEqual(
            [a.place(k) for k in keys],
            [b.place(k) for k in keys],
        )

    def test_always_places_something(self):
        for key in ["pier_arg_harbor_03_macro"] * 12:
            self.assertGreaterEqual(len(self.engine.place(key)), 1)

    def test_unknown_key_uses_fallback_box(self):
        info = self.catalog.lookup("no_such_module_macro")
        self.assertEqual(info.size, Vec3(500, 500, 500))
        result = self.engine.place("no_such_module_macro")
        self.assertEqual(result[0].position, Vec3(100 + 250 + 50, 0, 0))

    def test_place_many(self):
        result = self.engine.place_many([(STORAGE_CUBE, 3), ("prod_gen_graphene_macro", 0),
                                         ("prod_gen_graphene_macro", 2)])
        targets = [p.key for p in result if p.kind != CONNECTOR]
        self.assertEqual(targets, [STORAGE_CUBE] * 3 + ["prod_gen_graphene_macro"] * 2)


class TestBridgeAndFallback(unittest.TestCase):
    """Bridged and fallback passes, on a state with a single open node.

    The root keeps only its +X node at (100, 0, 0).  A 200-cube blocker
    at (250, 300, 0) is in the way of an 800-cube attached directly
    (box x 100..900) but clear of a bridge connector at (250, 0, 0)
    and of the cube chained past it at (850, 0, 0).
    """

    def setUp(self):
        self.catalog = build_catalog([
            {"key": CONNECTOR_KEY, "size": [200, 200, 200]},
            {"key": "cube_macro", "size": [800, 800, 800], "buffer": 0},
            {"key": "block_macro", "size": [200, 200, 200]},
        ])
        self.state = StructureState(self.catalog)
        for node in self.state.open_nodes[1:]:
            self.state.consume(node)
        self.state.add_module("block_macro", Vec3(250, 300, 0), open_nodes=False)
        self.engine = PlacementEngine(self.catalog, self.state)

    def test_direct_attachment_blocked(self):
        cube = self.catalog.lookup("cube_macro")
        node = self.state.open_nodes[0]
        self.assertTrue(self.state.collides(attach_center(node, cube, cube.buffer), cube))

    def test_bridges_with_connector(self):
        result = self.engine.place("cube_macro")
        self.assertEqual(
            [(p.key, p.position, p.kind) for p in result],
            [
                (CONNECTOR_KEY, Vec3(250, 0, 0), CONNECTOR),
                ("cube_macro", Vec3(850, 0, 0), ATTACHED),
            ],
        )
        _assert_no_overlaps(self, self.state.modules)

    def test_bridge_node_accounting(self):
        self.engine.place("cube_macro")
        # 1 open node, consumed by the connector; 6 from the connector, 6 from the cube
        self.assertEqual(len(self.state.open_nodes), 12)

    def test_failed_bridge_leaves_no_connector(self):
        self.state.add_module("block_macro", Vec3(850, 0, 0), open_nodes=False)
        result = self.engine.place("cube_macro")
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].kind, FALLBACK)
        self.assertNotIn(CONNECTOR, [m.kind for m in self.state.modules])
        # The only node is still open; the fallback cube added its own six
        self.assertEqual(len(self.state.open_nodes), 7)

    def test_fallback_position(self):
        self.state.add_module("block_macro", Vec3(850, 0, 0), open_nodes=False)
        result = self.engine.place("cube_macro")
        # root + 2 blockers placed before the fallback
        self.assertEqual(result[0].position, Vec3(LAYOUT_RULES.fallback_origin_x + 3 * 1000, 0, 0))


class TestFallbackStepping(unittest.TestCase):
    """Fallback placements step along +X until they are clear."""

    def setUp(self):
        self.catalog = load_catalog()
        self.state = StructureState(self.catalog)
        self.state.add_module("wall_macro", Vec3.ZERO,
                              info=ModuleInfo.box(10000, 10000, 10000), open_nodes=False)
        self.engine = PlacementEngine(self.catalog, self.state)

    def test_enclosed_root_falls_back(self):
        result = self.engine.place(STORAGE_CUBE)
        self.assertEqual(len(result), 1)
        self.assertEqual(result[0].kind, FALLBACK)
        self.assertEqual(result[0].position, Vec3(22000, 0, 0))
        self.assertEqual(len(self.state.open_nodes), 12)

    def test_fallback_steps_past_occupied_spot(self):
        self.state.add_module("block_macro", Vec3(23000, 0, 0),
                              info=ModuleInfo.box(1000, 1000, 1000), open_nodes=False)
        result = self.engine.place(STORAGE_CUBE)
        self.assertEqual(result[0].position, Vec3(24000, 0, 0))

    def test_later_modules_attach_to_fallback_module(self):
        self.engine.place(STORAGE_CUBE)
        result = self.engine.place(STORAGE_CUBE)
        self.assertEqual(result[0].kind, ATTACHED)
        _assert_no_overlaps(self, [m for m in self.state.modules if m.key != "wall_macro"])


class TestFactoryLayout(unittest.TestCase):
    """Integration test using the hull-factory fixture."""

    @classmethod
    def setUpClass(cls):
        cls.catalog = load_catalog()
        cls.design = make_factory_design()

    def test_attached_layout(self):
        layout = layout_station(self.design, self.catalog)
        first = layout.placements[0]
        self.assertEqual((first.key, first.position, first.kind), (CONNECTOR_KEY, Vec3.ZERO, ROOT))

        targets = [p.key for p in layout.placements[1:] if p.kind != CONNECTOR]
        self.assertEqual(targets, [
            "dockarea_arg_m_02_tradestation_01_macro",
            "storage_arg_l_container_01_macro",
            "storage_arg_l_solid_01_macro",
            *["prod_gen_hullparts_macro"] * 4,
            *["prod_gen_energycells_macro"] * 2,
            "prod_gen_refinedmetals_macro",
            "prod_gen_graphene_macro",
        ])
        self.assertEqual(len(layout.modules), len(layout.placements))
        _assert_no_overlaps(self, layout.modules)

    def test_layout_is_repeatable(self):
        a = layout_station(self.design, self.catalog)
        b = layout_station(self.design, self.catalog)
        self.assertEqual(a.placements, b.placements)

    def test_grid_layout(self):
        layout = layout_station(self.design, self.catalog, mode="grid")
        self.assertEqual(len(layout.placements), 11)
        self.assertTrue(all(p.kind == GRID for p in layout.placements))
        self.assertEqual(layout.placements[0].position, Vec3(0, 0, 0))
        self.assertEqual(layout.placements[9].position, Vec3(45000, 0, 0))
        self.assertEqual(layout.placements[10].position, Vec3(0, 0, 5000))

    def test_grid_positions(self):
        self.assertEqual(grid_positions(0), [])
        self.assertEqual(grid_positions(2), [Vec3(0, 0, 0), Vec3(5000, 0, 0)])

    def test_unknown_mode(self):
        with self.assertRaises(ValueError):
            layout_station(self.design, self.catalog, mode="spiral")

    def test_serialization_round_trip(self):
        layout = layout_station(self.design, self.catalog)
        data = layout_to_dict(layout)
        self.assertEqual(data["mode"], "attached")
        self.assertEqual(data["placements"][0]["position"], [0, 0, 0])
        parsed = parse_layout(data)
        self.assertEqual(parsed.placements, layout.placements)
        self.assertIsInstance(parsed.placements[1], Placement)

    def test_non_argon_extras_use_catalog_sizes(self):
        design = make_factory_design()
        design.culture = "paranid"
        layout = layout_station(design, self.catalog)
        storage = [m for m in layout.modules if m.key == "storage_par_l_container_01_macro"]
        self.assertEqual(len(storage), 1)
        self.assertEqual(storage[0].info.size, Vec3(800, 800, 800))
        dock = next(m for m in layout.modules if m.key.startswith("dockarea_par_"))
        self.assertEqual(dock.info.size, Vec3(400, 200, 400))

    def test_large_station_stays_collision_free(self):
        design = StationDesign(modules=[
            ModuleRequest("module_gen_prod_hullparts_01", 100),
            ModuleRequest("module_gen_prod_energycells_01", 50),
        ])
        layout = layout_station(design, self.catalog)
        self.assertEqual(len(layout.placements) - layout.connector_count, 151)
        _assert_no_overlaps(self, layout.modules)


if __name__ == "__main__":
    unittest.main()

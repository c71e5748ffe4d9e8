import io
import unittest

from lxml import etree

from petrikit.exceptions import XmlWriterError
from petrikit.IO.pnml import (
    PNML_NAMESPACE,
    PTNET_TYPE,
    to_pnml_string,
    to_pnml_tree,
    write_pnml,
)
from petrikit.Net.net import PetriNet

NS = {"pn": PNML_NAMESPACE}


class TestPnmlExport(unittest.TestCase):
    def setUp(self) -> None:
        self.net = PetriNet()
        p0 = self.net.add_place("start", marking=2)
        p1 = self.net.add_place()
        t0 = self.net.add_transition("go")
        self.net.add_arc(p0, t0)
        self.net.add_arc(t0, p1, mult=3, name="produce")

    def _parse(self, text: str) -> etree._Element:
        return etree.fromstring(text.encode("utf-8"))

    def test_document_skeleton(self):
        root = self._parse(to_pnml_string(self.net))
        self.assertEqual(root.tag, f"{{{PNML_NAMESPACE}}}pnml")
        net_el = root.find("pn:net", NS)
        self.assertEqual(net_el.get("id"), "net0")
        self.assertEqual(net_el.get("type"), PTNET_TYPE)
        page = net_el.find("pn:page", NS)
        self.assertEqual(page.get("id"), "page0")

    def test_every_entity_written(self):
        root = to_pnml_tree(self.net)
        self.assertEqual(
            [p.get("id") for p in root.iterfind(".//pn:place", NS)],
            ["place_0", "place_1"],
        )
        self.assertEqual(
            [t.get("id") for t in root.iterfind(".//pn:transition", NS)],
            ["transition_0"],
        )
        self.assertEqual(
            [a.get("id") for a in root.iterfind(".//pn:arc", NS)],
            ["arc_0", "arc_1"],
        )

    def test_names_markings_and_inscriptions(self):
        root = to_pnml_tree(self.net)
        p0 = root.find(".//pn:place[@id='place_0']", NS)
        self.assertEqual(p0.findtext("pn:name/pn:text", namespaces=NS), "start")
        self.assertEqual(
            p0.findtext("pn:initialMarking/pn:text", namespaces=NS), "2"
        )
        p1 = root.find(".//pn:place[@id='place_1']", NS)
        self.assertIsNone(p1.find("pn:name", NS))
        self.assertIsNone(p1.find("pn:initialMarking", NS))

        a1 = root.find(".//pn:arc[@id='arc_1']", NS)
        self.assertEqual(a1.get("source"), "transition_0")
        self.assertEqual(a1.get("target"), "place_1")
        self.assertEqual(a1.findtext("pn:name/pn:text", namespaces=NS), "produce")
        self.assertEqual(a1.findtext("pn:inscription/pn:text", namespaces=NS), "3")
        a0 = root.find(".//pn:arc[@id='arc_0']", NS)
        self.assertEqual(a0.findtext("pn:inscription/pn:text", namespaces=NS), "1")

    def test_xml_declaration_and_escaping(self):
        self.net.set_name(self.net.place_refs()[1], "a < b & c")
        text = to_pnml_string(self.net)
        self.assertTrue(text.startswith("<?xml"))
        self.assertIn("a &lt; b &amp; c", text)
        root = self._parse(text)
        self.assertEqual(
            root.findtext(".//pn:place[@id='place_1']/pn:name/pn:text", namespaces=NS),
            "a < b & c",
        )

    def test_control_characters_raise(self):
        self.net.set_name(self.net.transition_refs()[0], "bad\x00name")
        with self.assertRaises(XmlWriterError):
            to_pnml_string(self.net)

    def test_custom_ids(self):
        root = to_pnml_tree(self.net, net_id="N", page_id="P")
        self.assertEqual(root.find("pn:net", NS).get("id"), "N")
        self.assertEqual(root.find("pn:net/pn:page", NS).get("id"), "P")

    def test_empty_net(self):
        root = to_pnml_tree(PetriNet())
        page = root.find("pn:net/pn:page", NS)
        self.assertEqual(len(page), 0)

    def test_write_to_stream_and_determinism(self):
        buf = io.StringIO()
        write_pnml(self.net, buf)
        self.assertEqual(buf.getvalue(), to_pnml_string(self.net))
        self.assertEqual(to_pnml_string(self.net), to_pnml_string(self.net))


if __name__ == "__main__":
    unittest.main()

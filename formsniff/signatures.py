"""
Magic-number table used by the sniffer.

Entries are keyed by lowercase extension (no dot). Each entry lists the
(offset, uppercase hex) candidates tried in order for files carrying that
extension, and the MIME type reported when one of them matches. Several
container formats share a signature (ZIP for OOXML/OpenDocument/EPUB, OLE2
for legacy Office); lookups are gated by extension, so that is expected.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple


class Signature(NamedTuple):
    candidates: tuple[tuple[int, str], ...]
    mime: str


_ZIP = ((0, "504B0304"),)
_OOXML = ((0, "504B030414000600"), (0, "504B0304"))
_OLE2 = ((0, "D0CF11E0A1B11AE1"),)
_JPEG = (
    (0, "FFD8FFE0"),
    (0, "FFD8FFE1"),
    (0, "FFD8FFE2"),
    (0, "FFD8FFE8"),
    (0, "FFD8FFDB"),
    (0, "FFD8FFEE"),
)
_TIFF = ((0, "49492A00"), (0, "4D4D002A"))
_ASF = ((0, "3026B2758E66CF11"),)
_MATROSKA = ((0, "1A45DFA3"),)
_OGG = ((0, "4F676753"),)
_MPEG = ((0, "000001BA"), (0, "000001B3"))
_ISO = ((32769, "4344303031"), (34817, "4344303031"), (36865, "4344303031"))


SIGNATURES: MappingProxyType[str, Signature] = MappingProxyType({
    # Images
    "png": Signature(((0, "89504E470D0A1A0A"),), "image/png"),
    "jpg": Signature(_JPEG, "image/jpeg"),
    "jpeg": Signature(_JPEG, "image/jpeg"),
    "jpe": Signature(_JPEG, "image/jpeg"),
    "jfif": Signature(_JPEG, "image/jpeg"),
    "gif": Signature(((0, "474946383761"), (0, "474946383961")), "image/gif"),
    "bmp": Signature(((0, "424D"),), "image/bmp"),
    "dib": Signature(((0, "424D"),), "image/bmp"),
    "ico": Signature(((0, "00000100"),), "image/x-icon"),
    "cur": Signature(((0, "00000200"),), "image/x-icon"),
    "tif": Signature(_TIFF, "image/tiff"),
    "tiff": Signature(_TIFF, "image/tiff"),
    "webp": Signature(((8, "57454250"),), "image/webp"),
    "psd": Signature(((0, "38425053"),), "image/vnd.adobe.photoshop"),
    "heic": Signature(((4, "6674797068656963"), (4, "667479706D696631")), "image/heic"),
    "avif": Signature(((4, "6674797061766966"),), "image/avif"),
    "jp2": Signature(((0, "0000000C6A5020200D0A870A"),), "image/jp2"),
    "djvu": Signature(((0, "41542654464F524D"),), "image/vnd.djvu"),
    "xcf": Signature(((0, "67696D7020786366"),), "image/x-xcf"),
    "svg": Signature(((0, "3C3F786D6C20"), (0, "3C737667")), "image/svg+xml"),
    "dcm": Signature(((128, "4449434D"),), "application/dicom"),
    # Documents
    "pdf": Signature(((0, "25504446"),), "application/pdf"),
    "ps": Signature(((0, "25215053"),), "application/postscript"),
    "eps": Signature(((0, "C5D0D3C6"), (0, "252150532D41646F6265")), "application/postscript"),
    "rtf": Signature(((0, "7B5C72746631"),), "application/rtf"),
    "doc": Signature(_OLE2, "application/msword"),
    "dot": Signature(_OLE2, "application/msword"),
    "xls": Signature(_OLE2, "application/vnd.ms-excel"),
    "ppt": Signature(_OLE2, "application/vnd.ms-powerpoint"),
    "msg": Signature(_OLE2, "application/vnd.ms-outlook"),
    "msi": Signature(_OLE2, "application/x-msi"),
    "docx": Signature(
        _OOXML, "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
    ),
    "xlsx": Signature(
        _OOXML, "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    ),
    "pptx": Signature(
        _OOXML, "application/vnd.openxmlformats-officedocument.presentationml.presentation"
    ),
    "odt": Signature(_ZIP, "application/vnd.oasis.opendocument.text"),
    "ods": Signature(_ZIP, "application/vnd.oasis.opendocument.spreadsheet"),
    "odp": Signature(_ZIP, "application/vnd.oasis.opendocument.presentation"),
    "odg": Signature(_ZIP, "application/vnd.oasis.opendocument.graphics"),
    "epub": Signature(_ZIP, "application/epub+zip"),
    "mobi": Signature(((60, "424F4F4B4D4F4249"),), "application/x-mobipocket-ebook"),
    "xml": Signature(((0, "3C3F786D6C20"),), "application/xml"),
    "html": Signature(
        ((0, "3C21444F43545950452068746D6C"), (0, "3C21646F63747970652068746D6C"), (0, "3C68746D6C")),
        "text/html",
    ),
    "htm": Signature(
        ((0, "3C21444F43545950452068746D6C"), (0, "3C21646F63747970652068746D6C"), (0, "3C68746D6C")),
        "text/html",
    ),
    # Archives
    "zip": Signature(((0, "504B0304"), (0, "504B0506"), (0, "504B0708")), "application/zip"),
    "jar": Signature(_ZIP, "application/java-archive"),
    "apk": Signature(_ZIP, "application/vnd.android.package-archive"),
    "xpi": Signature(_ZIP, "application/x-xpinstall"),
    "rar": Signature(((0, "526172211A0700"), (0, "526172211A070100")), "application/vnd.rar"),
    "7z": Signature(((0, "377ABCAF271C"),), "application/x-7z-compressed"),
    "gz": Signature(((0, "1F8B08"),), "application/gzip"),
    "tgz": Signature(((0, "1F8B08"),), "application/gzip"),
    "bz2": Signature(((0, "425A68"),), "application/x-bzip2"),
    "xz": Signature(((0, "FD377A585A00"),), "application/x-xz"),
    "zst": Signature(((0, "28B52FFD"),), "application/zstd"),
    "lz": Signature(((0, "4C5A4950"),), "application/x-lzip"),
    "z": Signature(((0, "1F9D"), (0, "1FA0")), "application/x-compress"),
    "tar": Signature(((257, "7573746172"),), "application/x-tar"),
    "cab": Signature(((0, "4D534346"),), "application/vnd.ms-cab-compressed"),
    "iso": Signature(_ISO, "application/x-iso9660-image"),
    "deb": Signature(((0, "213C617263683E0A"),), "application/vnd.debian.binary-package"),
    "rpm": Signature(((0, "EDABEEDB"),), "application/x-rpm"),
    "crx": Signature(((0, "43723234"),), "application/x-chrome-extension"),
    # Executables and binaries
    "exe": Signature(((0, "4D5A"),), "application/x-msdownload"),
    "dll": Signature(((0, "4D5A"),), "application/x-msdownload"),
    "class": Signature(((0, "CAFEBABE"),), "application/java-vm"),
    "wasm": Signature(((0, "0061736D"),), "application/wasm"),
    "swf": Signature(((0, "435753"), (0, "465753"), (0, "5A5753")), "application/x-shockwave-flash"),
    "sqlite": Signature(((0, "53514C69746520666F726D6174203300"),), "application/vnd.sqlite3"),
    "db": Signature(((0, "53514C69746520666F726D6174203300"),), "application/vnd.sqlite3"),
    "pcap": Signature(((0, "D4C3B2A1"), (0, "A1B2C3D4")), "application/vnd.tcpdump.pcap"),
    # Audio
    "mp3": Signature(((0, "494433"), (0, "FFFB"), (0, "FFF3"), (0, "FFF2")), "audio/mpeg"),
    "wav": Signature(((8, "57415645"),), "audio/wav"),
    "flac": Signature(((0, "664C6143"),), "audio/flac"),
    "ogg": Signature(_OGG, "audio/ogg"),
    "oga": Signature(_OGG, "audio/ogg"),
    "opus": Signature(_OGG, "audio/ogg"),
    "mid": Signature(((0, "4D546864"),), "audio/midi"),
    "midi": Signature(((0, "4D546864"),), "audio/midi"),
    "m4a": Signature(((4, "667479704D344120"),), "audio/mp4"),
    "aac": Signature(((0, "FFF1"), (0, "FFF9")), "audio/aac"),
    "amr": Signature(((0, "2321414D52"),), "audio/amr"),
    "aif": Signature(((8, "41494646"),), "audio/aiff"),
    "aiff": Signature(((8, "41494646"),), "audio/aiff"),
    "wma": Signature(_ASF, "audio/x-ms-wma"),
    # Video
    "mp4": Signature(
        (
            (4, "6674797069736F6D"),
            (4, "667479706D703432"),
            (4, "667479704D534E56"),
            (4, "66747970"),
        ),
        "video/mp4",
    ),
    "m4v": Signature(((4, "667479704D345620"),), "video/x-m4v"),
    "mov": Signature(((4, "6674797071742020"), (4, "6D6F6F76")), "video/quicktime"),
    "3gp": Signature(((4, "6674797033677035"), (4, "66747970336770")), "video/3gpp"),
    "avi": Signature(((8, "41564920"),), "video/x-msvideo"),
    "webm": Signature(_MATROSKA, "video/webm"),
    "mkv": Signature(_MATROSKA, "video/x-matroska"),
    "flv": Signature(((0, "464C5601"),), "video/x-flv"),
    "ogv": Signature(_OGG, "video/ogg"),
    "wmv": Signature(_ASF, "video/x-ms-wmv"),
    "asf": Signature(_ASF, "video/x-ms-asf"),
    "mpg": Signature(_MPEG, "video/mpeg"),
    "mpeg": Signature(_MPEG, "video/mpeg"),
    # Fonts
    "ttf": Signature(((0, "0001000000"),), "font/ttf"),
    "otf": Signature(((0, "4F54544F"),), "font/otf"),
    "woff": Signature(((0, "774F4646"),), "font/woff"),
    "woff2": Signature(((0, "774F4632"),), "font/woff2"),
})

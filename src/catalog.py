"""Static data: menu entries, package candidates and fixed command lists."""
from __future__ import annotations

from typing import Dict, List, Tuple

from menu import MenuItem

PROGRAM_NAME = "LinuxBasix"
VERSION = "2.42"

BANNER = [
    r" _     _                 ______           _      ",
    r"| |   (_)                | ___ \         (_)     ",
    r"| |    _ _ __  _   ___  _| |_/ / __ _ ___ ___  __",
    r"| |   | | '_ \| | | \ \/ | ___ \/ _` / __| \ \/ /",
    r"| |___| | | | | |_| |>  <| |_/ | (_| \__ | |>  < ",
    r"\_____|_|_| |_|\__,_/_/\_\____/ \__,_|___|_/_/\_\ " + f"Version {VERSION}",
]

# action tags
SELECT_REPO = 'select_repo'
INSTALL_REPO = 'install_repo'
ADD_REPO = 'add_repo'
SELECT_FLATPAK = 'select_flatpak'
INSTALL_FLATPAK = 'install_flatpak'
INSTALL_1PASSWORD = 'install_1password'
INSTALL_SYNTHSHELL = 'install_synthshell'
INSTALL_FONTS = 'install_fonts'
SELECT_PACKAGE_MANAGER = 'select_package_manager'
STARTUP_ITEMS = 'startup_items'
GTK_PADDING = 'gtk_padding'
EXIT = 'exit'

MAIN_MENU = [
    MenuItem("Select original repo packages", SELECT_REPO),
    MenuItem("Install original repo packages", INSTALL_REPO),
    MenuItem("Add repo packages manually", ADD_REPO),
    MenuItem("Select Flatpak packages", SELECT_FLATPAK),
    MenuItem("Install Flatpak packages", INSTALL_FLATPAK),
    MenuItem("Install 1Password (latest) and Fastfetch (v2.21.3)", INSTALL_1PASSWORD),
    MenuItem("Install SynthShell scripts (cloning from Github.com)", INSTALL_SYNTHSHELL),
    MenuItem("Install additional fonts (JetBrains Mono / Hack)", INSTALL_FONTS),
    MenuItem("Select package manager for repo packages", SELECT_PACKAGE_MANAGER),
    MenuItem("Add startup items to ~/.bashrc (with check in editor)", STARTUP_ITEMS),
    MenuItem("Add padding for GTK 3.0/4.0 terminal emulators (CSS patch, 10 pixels)", GTK_PADDING),
    MenuItem("Exit (or press 'Q')", EXIT),
]

REPO_PACKAGES = [
    "curl", "git", "neovim", "htop", "tilix", "gdu", "nala", "mc",
    "zip", "unzip", "fortune-mod", "build-essential", "flatpak", "preload",
    "cmatrix", "cool-retro-term", "powertop", "upx-ucl", "fonts-powerline",
]

FLATPAK_PACKAGES = [
    "com.spotify.Client", "org.videolan.VLC",
    "com.github.tchx84.Flatseal", "com.discordapp.Discord",
    "com.ktechpit.colorwall", "com.mattjakeman.ExtensionManager", "com.microsoft.Edge",
    "com.valvesoftware.Steam", "net.cozic.joplin_desktop", "net.lutris.Lutris",
    "org.DolphinEmu.dolphin-emu", "org.duckstation.DuckStation", "org.libretro.RetroArch",
    "org.mozilla.Thunderbird", "net.sf.VICE", "net.fsuae.FS-UAE", "org.audacityteam.Audacity",
    "org.gimp.GIMP", "org.gnome.Boxes", "com.transmissionbt.Transmission", "fr.handbrake.ghb",
]

# (title, popup color) per selection screen
SELECTION_SCREENS: Dict[str, Tuple[str, str]] = {
    'repo': ("Select packages:", 'submenu_1'),
    'flatpak': ("Select Flatpaks:", 'submenu_2'),
    'package_manager': ("Select package manager:", 'submenu_3'),
}

APT_UPDATE = ["sudo", "apt-get", "update"]
APT_INSTALL = ["sudo", "apt-get", "install", "--ignore-missing"]
FLATHUB_REMOTE = [
    "flatpak", "-v", "remote-add", "--if-not-exists", "flathub",
    "https://dl.flathub.org/repo/flathub.flatpakrepo",
]
FLATPAK_INSTALL = ["flatpak", "install"]

FIXED_BATCHES: Dict[str, List[List[str]]] = {
    INSTALL_1PASSWORD: [
        ["clear"],
        [
            "wget", "https://downloads.1password.com/linux/debian/amd64/stable/1password-latest.deb",
            "https://github.com/fastfetch-cli/fastfetch/releases/download/2.21.3/fastfetch-linux-amd64.deb",
        ],
        ["sh", "-c", "sudo apt-get install ./1password-latest.deb ./fastfetch-linux-amd64.deb"],
        ["rm", "./1password-latest.deb", "./fastfetch-linux-amd64.deb"],
    ],
    INSTALL_SYNTHSHELL: [
        ["clear"],
        ["echo", "Installing SynthShell from Github.com \n\n"],
        ["git", "clone", "--recursive", "https://github.com/andresgongora/synth-shell.git"],
        ["sh", "-c", "cd ./synth-shell && ./setup.sh"],
    ],
    INSTALL_FONTS: [
        ["clear"],
        ["echo", "Installing additional fonts. \n"],
        ["wget", "https://github.com/source-foundry/Hack/releases/download/v3.003/Hack-v3.003-ttf.zip"],
        ["wget", "https://download.jetbrains.com/fonts/JetBrainsMono-1.0.3.zip"],
        ["sh", "-c", 'for i in *.zip; do unzip -u "$i" -d ~/.local/share/fonts && rm "$i"; done'],
        ["fc-cache", "-r", "-v"],
    ],
}

BASHRC_LINES = [
    "",
    "# Added by LinuxBasix",
    "alias ll='ls -la'",
    "alias ls='ls -l'",
    "alias cd..='cd ..'",
    "fastfetch",
    "echo ''",
    "fortune -s",
    "echo ''",
]

GTK_CSS_FILES = [
    ('.config', 'gtk-3.0', 'gtk.css'),
    ('.config', 'gtk-4.0', 'gtk.css'),
]

GTK_PADDING_LINES = [
    "",
    "/* Added by LinuxBasix: terminal padding */",
    "VteTerminal,",
    "TerminalScreen,",
    "vte-terminal {",
    "    padding: 10px 10px 10px 10px;",
    "    -VteTerminal-inner-border: 10px 10px 10px 10px;",
    "}",
]

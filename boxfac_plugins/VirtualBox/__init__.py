from .VirtualBox import VirtualBox as delegate_class
